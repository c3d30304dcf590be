"""Tests for container wiring."""

from mixmind.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.recommendation_service.feed_limit == settings.feed_limit
    assert container.inventory_service is not None
    shopping_service = container.shopping_service_for("user-1")
    assert shopping_service.user_id == "user-1"
    assert shopping_service.store.table == settings.shopping_lists_table
