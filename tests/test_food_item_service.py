"""Tests for the food item catalog service."""

from uuid import uuid4

import pytest

from race_fuel.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    ValidationErrorKind,
)
from race_fuel.domain.foods import FoodCategory
from race_fuel.domain.units import Unit
from race_fuel.services.food_items import FoodItemService
from tests.conftest import CARBS_ID, SODIUM_ID, InMemoryFoodItemRepository


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "Tailwind",
        "brand": "Tailwind Nutrition",
        "category": "SPORTS_DRINK",
        "cost": 2.5,
        "nutrients": [
            {"nutrient_id": CARBS_ID, "quantity": 25, "unit": "g"},
            {"nutrient_id": SODIUM_ID, "quantity": 303, "unit": "mg"},
        ],
    }
    payload.update(overrides)
    return payload


def test_create_item_normalizes_payload() -> None:
    service = FoodItemService(InMemoryFoodItemRepository())
    user_id = uuid4()

    item = service.create_item(user_id, _payload(name="  Tailwind  "))

    assert item.name == "Tailwind"
    assert item.category is FoodCategory.SPORTS_DRINK
    assert item.created_by == user_id
    assert [(n.nutrient_name, n.unit) for n in item.nutrients] == [
        ("Carbohydrates", Unit.G),
        ("Sodium", Unit.MG),
    ]


@pytest.mark.parametrize(
    ("overrides", "kind"),
    [
        ({"name": " "}, ValidationErrorKind.INVALID_FIELD),
        ({"category": "PIZZA"}, ValidationErrorKind.INVALID_FIELD),
        ({"cost": -1}, ValidationErrorKind.INVALID_FIELD),
        (
            {"nutrients": [{"nutrient_id": CARBS_ID, "quantity": 5, "unit": "oz"}]},
            ValidationErrorKind.INVALID_UNIT,
        ),
        (
            {
                "nutrients": [
                    {"nutrient_id": CARBS_ID, "quantity": 5, "unit": "g"},
                    {"nutrient_id": CARBS_ID, "quantity": 6, "unit": "g"},
                ]
            },
            ValidationErrorKind.INVALID_FIELD,
        ),
    ],
)
def test_create_item_rejects_invalid_payload(
    overrides: dict[str, object], kind: ValidationErrorKind
) -> None:
    repository = InMemoryFoodItemRepository()
    service = FoodItemService(repository)

    with pytest.raises(ValidationError) as excinfo:
        service.create_item(uuid4(), _payload(**overrides))

    assert excinfo.value.kind is kind
    assert repository.items == {}


def test_update_item_is_creator_only_and_replaces_nutrients() -> None:
    service = FoodItemService(InMemoryFoodItemRepository())
    owner = uuid4()
    item = service.create_item(owner, _payload())

    with pytest.raises(PermissionDeniedError):
        service.update_item(item.id, uuid4(), _payload(name="Stolen"))
    updated = service.update_item(
        item.id,
        owner,
        _payload(nutrients=[{"nutrient_id": CARBS_ID, "quantity": 50, "unit": "g"}]),
    )

    assert updated.id == item.id
    assert [(n.nutrient_id, n.quantity) for n in updated.nutrients] == [(CARBS_ID, 50)]


def test_list_items_can_filter_to_own() -> None:
    service = FoodItemService(InMemoryFoodItemRepository())
    me = uuid4()
    mine = service.create_item(me, _payload(name="Mine"))
    service.create_item(uuid4(), _payload(name="Theirs"))

    assert len(service.list_items(me)) == 2
    assert [item.id for item in service.list_items(me, mine_only=True)] == [mine.id]


def test_items_by_id_and_missing_item() -> None:
    service = FoodItemService(InMemoryFoodItemRepository())
    item = service.create_item(uuid4(), _payload())

    assert service.items_by_id([item.id, item.id]) == {item.id: item}
    assert service.items_by_id([]) == {}
    with pytest.raises(NotFoundError):
        service.get_item(uuid4())


def test_nutrient_unit_must_convert_to_other_items() -> None:
    service = FoodItemService(InMemoryFoodItemRepository())
    user_id = uuid4()
    service.create_item(user_id, _payload())

    with pytest.raises(ValidationError) as excinfo:
        service.create_item(
            user_id,
            _payload(
                name="Broth",
                nutrients=[{"nutrient_id": SODIUM_ID, "quantity": 5, "unit": "ml"}],
            ),
        )

    assert excinfo.value.kind is ValidationErrorKind.INVALID_UNIT
    chews = service.create_item(
        user_id,
        _payload(
            name="Chews",
            nutrients=[{"nutrient_id": SODIUM_ID, "quantity": 0.1, "unit": "g"}],
        ),
    )
    assert chews.nutrients[0].unit is Unit.G


def test_update_item_can_change_unit_of_its_own_nutrient() -> None:
    service = FoodItemService(InMemoryFoodItemRepository())
    user_id = uuid4()
    item = service.create_item(
        user_id,
        _payload(nutrients=[{"nutrient_id": SODIUM_ID, "quantity": 5, "unit": "ml"}]),
    )

    updated = service.update_item(
        item.id,
        user_id,
        _payload(nutrients=[{"nutrient_id": SODIUM_ID, "quantity": 300, "unit": "mg"}]),
    )

    assert updated.nutrients[0].unit is Unit.MG
