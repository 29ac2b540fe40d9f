"""
Pet Store Web Pages
Routes each page to its view, fills the view model from the session and services
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from petstoreapp.api.dependencies import (
    PageContext,
    get_page_context,
    get_petstore_service,
    get_search_service,
)
from petstoreapp.domain.pet import Pet
from petstoreapp.services.petstore_service import PetStoreService
from petstoreapp.services.search_service import SearchService

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(dependencies=[Depends(get_page_context)])

PET_CATEGORIES = {"Dog", "Cat", "Fish"}
PRODUCT_CATEGORIES = {"Toy", "Food"}
SEARCH_COMPANIES = ["Chewy", "PetCo", "PetSmart", "Walmart"]


def render(request: Request, ctx: PageContext, view: str, **model):
    """Render a view with the shared page model plus route-specific entries"""
    context = dict(ctx.model)
    context.update(model)
    return templates.TemplateResponse(request, f"{view}.html", context)


def lookup_pet(ctx: PageContext, pet_id: int) -> Pet:
    """Pet by 1-based position in the session's cached list, empty Pet if absent"""
    try:
        if pet_id < 1:
            raise IndexError(f"pet id {pet_id} out of range")
        return ctx.session_user.pets[pet_id - 1]
    except (IndexError, TypeError) as e:
        ctx.session_user.telemetry_client.track_exception(e)
        return Pet()


@router.get("/login")
async def login(request: Request, ctx: PageContext = Depends(get_page_context)):
    logger.info("PetStoreApp /login requested, routing to login view...")
    ctx.session_user.telemetry_client.track_page_view("login", str(request.url))
    return render(request, ctx, "login")


# one handler, several URLs, so telemetry can tell the pages apart
@router.get("/dogbreeds")
@router.get("/catbreeds")
@router.get("/fishbreeds")
async def breeds(
    request: Request,
    category: str = Query(...),
    ctx: PageContext = Depends(get_page_context),
    service: PetStoreService = Depends(get_petstore_service)
):
    if category not in PET_CATEGORIES:
        return render(request, ctx, "home")

    logger.info(f"PetStoreApp /breeds requested for {category}, routing to breeds view...")
    pets = await service.get_pets(category)
    return render(request, ctx, "breeds", pets=pets, category=category)


@router.get("/breeddetails")
async def breed_details(
    request: Request,
    category: str = Query(...),
    pet_id: int = Query(..., alias="id"),
    ctx: PageContext = Depends(get_page_context),
    service: PetStoreService = Depends(get_petstore_service)
):
    if category not in PET_CATEGORIES:
        return render(request, ctx, "home")

    if ctx.session_user.pets is None:
        await service.get_pets(category)

    pet = lookup_pet(ctx, pet_id)

    logger.info(f"PetStoreApp /breeddetails requested for {pet.name}, routing to breeddetails view...")
    return render(request, ctx, "breeddetails", pet=pet)


@router.get("/products")
async def products(
    request: Request,
    category: str = Query(...),
    pet_id: int = Query(..., alias="id"),
    ctx: PageContext = Depends(get_page_context),
    service: PetStoreService = Depends(get_petstore_service)
):
    if category not in PRODUCT_CATEGORIES:
        return render(request, ctx, "home")

    logger.info(f"PetStoreApp /products requested for {category}, routing to products view...")

    # a stateless container may not have this session's pets yet
    await service.get_pets(category)
    pet = lookup_pet(ctx, pet_id)

    product_category = f"{pet.category_name or ''} {category}"
    found = await service.get_products(product_category, pet.tags)
    return render(request, ctx, "products", products=found, pet=pet)


@router.get("/cart")
async def cart(
    request: Request,
    ctx: PageContext = Depends(get_page_context),
    service: PetStoreService = Depends(get_petstore_service)
):
    order = await service.retrieve_order(ctx.session_user.session_id)
    ctx.session_user.cart_count = order.open_item_count if order else 0

    extra = {"order": order, "cartSize": ctx.session_user.cart_count}
    if ctx.signed_in:
        extra["userLoggedIn"] = True
        extra["email"] = ctx.session_user.email
    return render(request, ctx, "cart", **extra)


@router.post("/updatecart")
async def update_cart(
    product_id: int = Form(..., alias="productId"),
    operator: Optional[str] = Form(None),
    service: PetStoreService = Depends(get_petstore_service)
):
    quantity = -1 if operator == "minus" else 1
    await service.update_order(product_id, quantity, False)
    return RedirectResponse(url="/cart", status_code=303)


@router.post("/completecart")
async def complete_cart(
    ctx: PageContext = Depends(get_page_context),
    service: PetStoreService = Depends(get_petstore_service)
):
    if ctx.signed_in:
        await service.update_order(0, 0, True)
    return RedirectResponse(url="/cart", status_code=303)


@router.get("/claims")
async def claims(request: Request, ctx: PageContext = Depends(get_page_context)):
    logger.info(f"PetStoreApp /claims requested for {ctx.session_user.name}, routing to claims view...")
    return render(request, ctx, "claims")


@router.get("/slowness")
async def slowness(request: Request, ctx: PageContext = Depends(get_page_context)):
    logger.info("PetStoreApp simulating slowness, routing to slowness view...")
    await asyncio.sleep(request.app.state.settings.SLOWNESS_DELAY_SECONDS)
    ctx.session_user.telemetry_client.track_page_view("slow operation", str(request.url))
    return render(request, ctx, "slowness")


@router.get("/exception")
async def exception(request: Request, ctx: PageContext = Depends(get_page_context)):
    error = AttributeError("'NoneType' object has no attribute 'name' (simulated)")
    logger.info(f"PetStoreApp simulating {type(error).__name__}, routing to exception view...")
    ctx.session_user.telemetry_client.track_exception(error)
    return render(request, ctx, "exception")


@router.get("/bingSearch")
async def bing_search(
    request: Request,
    ctx: PageContext = Depends(get_page_context),
    search: SearchService = Depends(get_search_service)
):
    logger.info(f"PetStoreApp /bingSearch requested for {ctx.session_user.name}, routing to bingSearch view...")
    webpages = [await search.bing_search(company) for company in SEARCH_COMPANIES]
    return render(request, ctx, "bingSearch", companies=SEARCH_COMPANIES, webpages=webpages)


# catch-all, keep last
@router.get("/")
@router.get("/{page}")
async def landing(request: Request, ctx: PageContext = Depends(get_page_context)):
    logger.info(
        f"PetStoreApp {request.url.path} requested and {ctx.session_user.name} is being routed "
        f"to home view session {ctx.session_user.session_id}"
    )
    ctx.session_user.telemetry_client.track_page_view("landing", str(request.url))
    return render(request, ctx, "home")
