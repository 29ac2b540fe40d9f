"""
PetStoreApp - Pet Store web front end
"""
