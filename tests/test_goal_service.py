"""Tests for event nutrient goals."""

from uuid import uuid4

import pytest

from race_fuel.domain.errors import NotFoundError, ValidationError, ValidationErrorKind
from race_fuel.domain.events import EventType
from race_fuel.domain.units import Unit
from race_fuel.services.events import EventService
from race_fuel.services.goals import GoalService
from tests.conftest import CARBS_ID, SODIUM_ID, InMemoryFoodItemRepository, make_food


def test_replace_base_goals_overwrites_previous(
    event_service: EventService, goal_service: GoalService
) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 7200)
    goal_service.replace_base_goals(
        user_id, event.id, [{"nutrient_id": CARBS_ID, "quantity": 60, "unit": "g"}]
    )

    saved = goal_service.replace_base_goals(
        user_id,
        event.id,
        [
            {"nutrient_id": CARBS_ID, "quantity": 90, "unit": "g"},
            {"nutrient_id": SODIUM_ID, "quantity": 500, "unit": "MG"},
        ],
    )
    goals = goal_service.get_goals(user_id, event.id)

    assert len(saved) == 2
    assert {(goal.nutrient_id, goal.quantity) for goal in goals.base} == {
        (CARBS_ID, 90),
        (SODIUM_ID, 500),
    }
    assert {goal.unit for goal in goals.base} == {Unit.G, Unit.MG}


def test_goals_are_scoped_per_user(
    event_service: EventService, goal_service: GoalService
) -> None:
    owner = uuid4()
    event = event_service.create_event(owner, "Race", EventType.RUN, 7200)
    goal_service.replace_base_goals(
        owner, event.id, [{"nutrient_id": CARBS_ID, "quantity": 60, "unit": "g"}]
    )

    assert goal_service.get_goals(uuid4(), event.id).base == []


def test_replace_hourly_goals_validates_hours(
    event_service: EventService, goal_service: GoalService
) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 5400)

    saved = goal_service.replace_hourly_goals(
        user_id,
        event.id,
        [
            {"nutrient_id": CARBS_ID, "quantity": 40, "unit": "g", "hour": 1},
            {"nutrient_id": CARBS_ID, "quantity": 70, "unit": "g", "hour": 0},
        ],
    )

    assert [goal.hour for goal in goal_service.get_goals(user_id, event.id).hourly] == [
        0,
        1,
    ]
    assert len(saved) == 2
    with pytest.raises(ValidationError) as excinfo:
        goal_service.replace_hourly_goals(
            user_id,
            event.id,
            [{"nutrient_id": CARBS_ID, "quantity": 40, "unit": "g", "hour": 2}],
        )
    assert excinfo.value.kind is ValidationErrorKind.HOUR_OUT_OF_RANGE


@pytest.mark.parametrize(
    ("goals", "kind"),
    [
        (
            [{"nutrient_id": CARBS_ID, "quantity": 40, "unit": "kcal", "hour": 0}],
            ValidationErrorKind.INVALID_UNIT,
        ),
        (
            [{"nutrient_id": CARBS_ID, "quantity": -1, "unit": "g", "hour": 0}],
            ValidationErrorKind.INVALID_FIELD,
        ),
        (
            [
                {"nutrient_id": CARBS_ID, "quantity": 40, "unit": "g", "hour": 0},
                {"nutrient_id": CARBS_ID, "quantity": 50, "unit": "g", "hour": 0},
            ],
            ValidationErrorKind.INVALID_FIELD,
        ),
    ],
)
def test_replace_hourly_goals_rejects_bad_rows(
    event_service: EventService,
    goal_service: GoalService,
    goals: list[dict[str, object]],
    kind: ValidationErrorKind,
) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 3600)

    with pytest.raises(ValidationError) as excinfo:
        goal_service.replace_hourly_goals(user_id, event.id, goals)

    assert excinfo.value.kind is kind


def test_delete_goals(event_service: EventService, goal_service: GoalService) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 3600)
    base = goal_service.replace_base_goals(
        user_id, event.id, [{"nutrient_id": CARBS_ID, "quantity": 60, "unit": "g"}]
    )
    hourly = goal_service.replace_hourly_goals(
        user_id,
        event.id,
        [{"nutrient_id": CARBS_ID, "quantity": 60, "unit": "g", "hour": 0}],
    )

    goal_service.delete_base_goal(base[0].id)
    goal_service.delete_hourly_goal(hourly[0].id)

    goals = goal_service.get_goals(user_id, event.id)
    assert goals.base == []
    assert goals.hourly == []
    with pytest.raises(NotFoundError):
        goal_service.delete_base_goal(base[0].id)


def test_goals_require_existing_event(goal_service: GoalService) -> None:
    with pytest.raises(NotFoundError):
        goal_service.get_goals(uuid4(), uuid4())


def test_goal_unit_must_convert_to_food_item_units(
    event_service: EventService,
    goal_service: GoalService,
    food_item_repository: InMemoryFoodItemRepository,
) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 3600)
    food_item_repository.add(make_food("Gel", [(CARBS_ID, 25, Unit.G)]))

    with pytest.raises(ValidationError) as excinfo:
        goal_service.replace_base_goals(
            user_id,
            event.id,
            [{"nutrient_id": CARBS_ID, "quantity": 60, "unit": "ml"}],
        )

    assert excinfo.value.kind is ValidationErrorKind.INVALID_UNIT
    assert goal_service.get_goals(user_id, event.id).base == []
    saved = goal_service.replace_base_goals(
        user_id,
        event.id,
        [{"nutrient_id": CARBS_ID, "quantity": 60000, "unit": "mg"}],
    )
    assert saved[0].unit is Unit.MG


def test_hourly_goal_unit_must_convert_to_base_goal_unit(
    event_service: EventService, goal_service: GoalService
) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 7200)
    goal_service.replace_base_goals(
        user_id, event.id, [{"nutrient_id": SODIUM_ID, "quantity": 500, "unit": "mg"}]
    )

    with pytest.raises(ValidationError) as excinfo:
        goal_service.replace_hourly_goals(
            user_id,
            event.id,
            [{"nutrient_id": SODIUM_ID, "quantity": 5, "unit": "ml", "hour": 1}],
        )

    assert excinfo.value.kind is ValidationErrorKind.INVALID_UNIT


def test_goal_rejects_malformed_nutrient_id(
    event_service: EventService, goal_service: GoalService
) -> None:
    user_id = uuid4()
    event = event_service.create_event(user_id, "Race", EventType.RUN, 3600)

    with pytest.raises(ValidationError) as excinfo:
        goal_service.replace_base_goals(
            user_id, event.id, [{"nutrient_id": "carbs", "quantity": 60, "unit": "g"}]
        )

    assert excinfo.value.kind is ValidationErrorKind.INVALID_FIELD
