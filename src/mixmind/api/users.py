"""Per-user recommendation and shopping endpoints with token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from mixmind.api.models import (
    AddBarIngredientRequest,
    CreateShoppingListRequest,
    RecommendationRequest,
    UpdateItemRequest,
)
from mixmind.domain.errors import InvalidInputError

if TYPE_CHECKING:
    from mixmind.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/feed", dependencies=[Depends(require_api_token)])
async def personalized_feed(user_id: str, request: Request) -> dict[str, object]:
    """Return the home feed buckets."""
    feed = _container(request).recommendation_service.get_personalized_feed(user_id)
    return {"feed": feed}


@router.post("/recommendations", dependencies=[Depends(require_api_token)])
async def recommendations(
    user_id: str, body: RecommendationRequest, request: Request
) -> dict[str, object]:
    """Return ranked recipes matching the supplied filters."""
    service = _container(request).recommendation_service
    return {
        "recommendations": service.get_top_recommendations(
            user_id, limit=body.limit, filters=body.to_filters()
        )
    }


@router.get("/makeable", dependencies=[Depends(require_api_token)])
async def makeable(user_id: str, request: Request) -> dict[str, object]:
    """Return recipes the user can make from their bar."""
    service = _container(request).recommendation_service
    return {"recipes": service.get_makeable_recipes(user_id)}


@router.get("/shopping/lists", dependencies=[Depends(require_api_token)])
async def shopping_lists(user_id: str, request: Request) -> dict[str, object]:
    """Return every stored shopping list."""
    return {"lists": _container(request).shopping_service_for(user_id).get_lists()}


@router.post(
    "/shopping/lists",
    dependencies=[Depends(require_api_token)],
    status_code=status.HTTP_201_CREATED,
)
async def create_shopping_list(
    user_id: str, body: CreateShoppingListRequest, request: Request
) -> dict[str, object]:
    """Create a shopping list from recipe ingredient lines."""
    service = _container(request).shopping_service_for(user_id)
    shopping_list = service.create_list(
        body.recipe_name, body.ingredients, recipe_id=body.recipe_id
    )
    return {"list": shopping_list}


@router.delete(
    "/shopping/items/{item_id}",
    dependencies=[Depends(require_api_token)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_shopping_item(user_id: str, item_id: str, request: Request) -> None:
    """Delete one shopping item, pruning its list if emptied."""
    _container(request).shopping_service_for(user_id).delete_item(item_id)


@router.patch("/shopping/items/{item_id}", dependencies=[Depends(require_api_token)])
async def update_shopping_item(
    user_id: str, item_id: str, body: UpdateItemRequest, request: Request
) -> dict[str, str]:
    """Change the checked state or brand of one shopping item."""
    if body.checked is None and body.brand is None:
        raise InvalidInputError("Provide checked or brand")
    service = _container(request).shopping_service_for(user_id)
    if body.brand is not None:
        service.update_item_brand(item_id, body.brand)
    if body.checked is not None:
        service.set_checked(item_id, body.checked)
    return {"status": "ok"}


@router.get("/shopping/consolidated", dependencies=[Depends(require_api_token)])
async def consolidated(user_id: str, request: Request) -> dict[str, object]:
    """Return the per-recipe and combined cart views."""
    view = _container(request).shopping_service_for(user_id).get_consolidated()
    return {"items_by_recipe": view.items_by_recipe, "all_items": view.all_items}


@router.post("/shopping/migrate", dependencies=[Depends(require_api_token)])
async def migrate_shopping_lists(user_id: str, request: Request) -> dict[str, int]:
    """Backfill missing item subcategories."""
    changed = _container(request).shopping_service_for(user_id).migrate()
    return {"migrated": changed}


@router.get("/shopping/cart", dependencies=[Depends(require_api_token)])
async def shopping_cart(user_id: str, request: Request) -> dict[str, object]:
    """Return the merged cart with its estimated total and aisle groups."""
    summary = _container(request).shopping_service_for(user_id).get_cart_summary()
    return {
        "items": summary.items,
        "total_cost": summary.total_cost,
        "by_category": summary.by_category,
    }


@router.post(
    "/shopping/items/{item_id}/purchase",
    dependencies=[Depends(require_api_token)],
    status_code=status.HTTP_201_CREATED,
)
async def purchase_shopping_item(
    user_id: str, item_id: str, request: Request
) -> dict[str, object]:
    """Move a bought item into the home bar and check it off."""
    container = _container(request)
    shopping_service = container.shopping_service_for(user_id)
    item = shopping_service.get_item(item_id)
    ingredient = container.inventory_service.add_purchased(user_id, item)
    shopping_service.set_checked(item_id, True)
    return {"ingredient": ingredient}


@router.get("/bar", dependencies=[Depends(require_api_token)])
async def bar_ingredients(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's home bar."""
    return {
        "ingredients": _container(request).inventory_service.list_ingredients(user_id)
    }


@router.post(
    "/bar",
    dependencies=[Depends(require_api_token)],
    status_code=status.HTTP_201_CREATED,
)
async def add_bar_ingredient(
    user_id: str, body: AddBarIngredientRequest, request: Request
) -> dict[str, object]:
    """Add a bottle or ingredient to the home bar."""
    ingredient = _container(request).inventory_service.add(
        user_id,
        name=body.name,
        category=body.category,
        subcategory=body.subcategory,
        brand=body.brand,
        abv=body.abv,
        volume=body.volume,
        tags=tuple(body.tags),
    )
    return {"ingredient": ingredient}


@router.delete(
    "/bar/{ingredient_id}",
    dependencies=[Depends(require_api_token)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def finish_bar_ingredient(
    user_id: str, ingredient_id: str, request: Request
) -> None:
    """Remove a finished bottle from the home bar."""
    _container(request).inventory_service.finish(user_id, ingredient_id)
