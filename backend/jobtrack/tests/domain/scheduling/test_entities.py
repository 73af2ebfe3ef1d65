"""Unit tests for scheduling entities and domain errors."""

from datetime import date, datetime, time, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from jobtrack.domain.shared.exceptions import (
    ErrorType,
    FeatureDisabledError,
    NoCapacityFoundError,
    NoOperationsDefinedError,
)
from jobtrack.domain.scheduling.entities.suggestion import ConflictWarning
from jobtrack.domain.scheduling.value_objects.enums import ConflictSeverity, ConflictType
from jobtrack.tests.factories import NOW, make_assignment, make_job, make_operation, make_work_center


class TestOperation:
    def test_skill_requirements_normalized(self):
        op = make_operation(1, 60, skill_requirements=[" Welding", "welding", ""])

        assert op.skill_requirements == frozenset({"welding"})

    def test_single_skill_string(self):
        assert make_operation(1, 60, skill_requirements="CNC").skill_requirements == {"cnc"}

    @pytest.mark.parametrize("minutes", [0, -5])
    def test_non_positive_duration_rejected(self, minutes):
        with pytest.raises(PydanticValidationError):
            make_operation(1, minutes)

    def test_non_positive_sequence_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_operation(0, 60)

    def test_immutable(self):
        op = make_operation(1, 60)

        with pytest.raises(PydanticValidationError):
            op.estimated_duration = 120

    def test_estimated_hours(self):
        assert make_operation(1, 90).estimated_hours == 1.5


class TestWorkCenter:
    def test_supports_subset_of_tags(self):
        wc = make_work_center(skill_tags={"Welding", "assembly"})

        assert wc.supports({"welding"})
        assert wc.supports(set())
        assert not wc.supports({"welding", "painting"})

    @pytest.mark.parametrize("hours", [0, 25])
    def test_capacity_bounds(self, hours):
        with pytest.raises(PydanticValidationError):
            make_work_center(hours=hours)

    def test_calendar(self):
        wc = make_work_center(hours=10, holidays={date(2024, 12, 25)})

        calendar = wc.calendar(time(7, 0), [0, 1, 2, 3, 4])

        assert calendar.hours_per_day == 10
        assert calendar.day_start == time(7, 0)
        assert calendar.working_weekdays == frozenset(range(5))
        assert not calendar.is_working_day(date(2024, 12, 25))


class TestJobDescriptor:
    def test_date_means_end_of_day(self):
        job = make_job(due_date=date(2024, 1, 10))

        assert job.due_at(NOW, 14) == datetime(2024, 1, 11, 0, 0)

    def test_date_string_parsed_as_date(self):
        job = make_job(due_date=" 2024-01-10 ")

        assert job.due_date == date(2024, 1, 10)
        assert job.due_at(NOW, 14) == datetime(2024, 1, 11, 0, 0)

    def test_datetime_string_keeps_time(self):
        assert make_job(due_date="2024-01-10T15:30:00").due_date == datetime(2024, 1, 10, 15, 30)

    def test_datetime_used_as_is(self):
        due = datetime(2024, 1, 10, 15, 30)

        assert make_job(due_date=due).due_at(NOW, 14) == due

    def test_missing_due_date_defaults(self):
        assert make_job().due_at(NOW, 14) == datetime(2024, 1, 23, 0, 0)

    def test_priority_bounds(self):
        with pytest.raises(PydanticValidationError):
            make_job(priority_level=6)


class TestSuggestionModels:
    def test_assignment_to_booking(self):
        assignment = make_assignment(1, NOW, 60)

        booking = assignment.to_booking("job-1")

        assert booking.work_center_id == "wc-1"
        assert booking.interval == assignment.interval
        assert booking.end == NOW + timedelta(minutes=60)
        assert booking.operation_id == "op-1"

    def test_conflict_warning_enum_values(self):
        warning = ConflictWarning(type="overlap", severity="critical", message="m")

        assert warning.type == ConflictType.OVERLAP
        assert warning.severity == ConflictSeverity.CRITICAL
        assert ConflictSeverity.INFO.rank < ConflictSeverity.WARNING.rank < ConflictSeverity.CRITICAL.rank


class TestDomainErrors:
    def test_validation_error_dict(self):
        error = NoOperationsDefinedError("job-1")

        payload = error.to_dict()

        assert payload["type"] == "validation"
        assert payload["error_code"] == "NO_OPERATIONS_DEFINED"
        assert payload["field"] == "operations"

    def test_capacity_error_dict(self):
        error = NoCapacityFoundError("wc-1", 600, NOW, NOW + timedelta(days=90), reason="too long")

        payload = error.to_dict()

        assert payload["type"] == "resource_conflict"
        assert payload["details"]["duration_minutes"] == 600
        assert payload["message"].endswith(": too long")

    def test_feature_disabled(self):
        error = FeatureDisabledError("Smart scheduling suggestions")

        assert error.error_type == ErrorType.BUSINESS_RULE
        assert error.details == {"feature": "Smart scheduling suggestions"}
