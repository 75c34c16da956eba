"""Tests for dashboard summary aggregation.

Invariants:
1. paid_ratio is an integer in [0, 100] and 0 without registrations
2. The status histogram has 4 buckets summing to the course count
3. Revenue counts a course once per paid registration referencing it
4. recent_courses holds at most 5 courses, newest first, undated last
5. Aggregation is deterministic
"""

import pytest

from conftest import COURSE_A, COURSE_B, COURSE_C, course_ref

from courseboard.aggregation.summary import aggregate, aggregate_snapshot, empty_stats
from courseboard.models.domain import Course, Registration, Snapshot


def _aggregate(courses=(), registrations=(), instructors=(), participants=(), rooms=()):
    return aggregate(list(courses), list(instructors), list(participants), list(rooms), list(registrations))


def _histogram(summary) -> dict[str, int]:
    return {entry.status: entry.count for entry in summary.status_histogram}


class TestScenarios:
    """Fixed end-to-end scenarios."""

    def test_empty_inputs(self):
        """No data gives an all-zero summary."""
        summary = _aggregate()
        assert summary.stats == empty_stats()
        assert _histogram(summary) == {"planned": 0, "active": 0, "completed": 0, "cancelled": 0}
        assert summary.recent_courses == []

    def test_two_paid_registrations_same_course(self):
        """Shared course price is added once per paid registration."""
        courses = [
            Course(record_id=COURSE_A, price=100, status="active"),
            Course(record_id=COURSE_B, price=300, status="active"),
            Course(record_id=COURSE_C, price=50, status="cancelled"),
        ]
        registrations = [
            Registration(record_id="r1", paid=True, course_ref=course_ref(COURSE_A)),
            Registration(record_id="r2", paid=True, course_ref=course_ref(COURSE_A)),
        ]

        summary = _aggregate(courses, registrations)

        assert summary.stats.paid_ratio == 100
        assert summary.stats.revenue == 200
        assert summary.stats.active_courses == 2
        assert _histogram(summary) == {"planned": 0, "active": 2, "completed": 0, "cancelled": 1}

    def test_unparseable_reference_contributes_nothing(self, courses):
        """A paid registration without an extractable id adds no revenue."""
        registrations = [Registration(record_id="r1", paid=True, course_ref="kurs/not-an-id")]

        summary = _aggregate(courses, registrations)

        assert summary.stats.revenue == 0
        assert summary.stats.paid_ratio == 100

    def test_six_dated_courses_keeps_five_latest(self):
        """Only the five latest courses are listed, newest first."""
        dates = ["2026-01-10", "2026-06-01", "2025-12-24", "2026-03-15", "2026-02-01", "2026-04-30"]
        courses = [Course(record_id=f"c{i}", start_date=d) for i, d in enumerate(dates)]

        summary = _aggregate(courses)

        assert [c.start_date for c in summary.recent_courses] == [
            "2026-06-01",
            "2026-04-30",
            "2026-03-15",
            "2026-02-01",
            "2026-01-10",
        ]


class TestCounts:
    """Pass-through counts."""

    def test_counts_are_collection_lengths(self, courses, counted, registrations):
        """Every count equals the length of its collection."""
        instructors, participants, rooms = counted
        summary = aggregate(courses, instructors, participants, rooms, registrations)

        assert summary.stats.courses == 3
        assert summary.stats.instructors == 2
        assert summary.stats.participants == 3
        assert summary.stats.rooms == 1
        assert summary.stats.registrations == 3

    def test_active_count_is_exact_match(self):
        """Only status == active counts as active."""
        courses = [
            Course(record_id="c1", status="active"),
            Course(record_id="c2", status="planned"),
            Course(record_id="c3", status="completed"),
        ]
        assert _aggregate(courses).stats.active_courses == 1


class TestPaidRatio:
    """Paid ratio rounding and bounds."""

    @pytest.mark.parametrize(
        "paid,total,expected",
        [
            (0, 0, 0),
            (0, 3, 0),
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds up
            (1, 200, 1),  # 0.5 rounds up
            (29, 200, 15),  # 14.5 rounds up
            (3, 3, 100),
        ],
    )
    def test_round_half_up(self, paid, total, expected):
        """Ratio is 100 * paid / total rounded half up."""
        registrations = [Registration(record_id=f"r{i}", paid=i < paid) for i in range(total)]
        assert _aggregate(registrations=registrations).stats.paid_ratio == expected

    @pytest.mark.parametrize("total", range(0, 25))
    def test_always_in_range(self, total):
        """For any count the ratio stays within 0..100."""
        for paid in range(total + 1):
            registrations = [Registration(record_id=f"r{i}", paid=i < paid) for i in range(total)]
            ratio = _aggregate(registrations=registrations).stats.paid_ratio
            assert 0 <= ratio <= 100


class TestRevenue:
    """Revenue accumulation."""

    def test_double_counting_preserved(self, courses, registrations):
        """Two paid registrations for course A count its price twice."""
        summary = _aggregate(courses, registrations)
        assert summary.stats.revenue == 200

    def test_unpaid_registrations_ignored(self, courses):
        """Unpaid registrations contribute nothing."""
        registrations = [Registration(record_id="r1", paid=False, course_ref=course_ref(COURSE_B))]
        assert _aggregate(courses, registrations).stats.revenue == 0

    def test_course_without_price_contributes_zero(self, courses):
        """A resolved course with no price adds nothing."""
        registrations = [Registration(record_id="r1", paid=True, course_ref=course_ref(COURSE_C))]
        assert _aggregate(courses, registrations).stats.revenue == 0

    def test_unknown_course_contributes_zero(self, courses):
        """A well-formed id matching no course adds nothing."""
        registrations = [
            Registration(record_id="r1", paid=True, course_ref=course_ref("0" * 24)),
        ]
        assert _aggregate(courses, registrations).stats.revenue == 0

    def test_missing_reference_contributes_zero(self, courses):
        """A paid registration without a course adds nothing."""
        registrations = [Registration(record_id="r1", paid=True, course_ref=None)]
        assert _aggregate(courses, registrations).stats.revenue == 0

    def test_first_course_wins_on_duplicate_ids(self):
        """With repeated record ids the first course in order is used."""
        courses = [
            Course(record_id=COURSE_A, price=10),
            Course(record_id=COURSE_A, price=999),
        ]
        registrations = [Registration(record_id="r1", paid=True, course_ref=course_ref(COURSE_A))]
        assert _aggregate(courses, registrations).stats.revenue == 10

    def test_id_match_is_case_sensitive(self):
        """Extracted ids compare exactly with course record ids."""
        courses = [Course(record_id=COURSE_A, price=10)]
        registrations = [
            Registration(record_id="r1", paid=True, course_ref=course_ref(COURSE_A.upper())),
        ]
        assert _aggregate(courses, registrations).stats.revenue == 0

    def test_fractional_prices(self):
        """Prices sum as numbers."""
        courses = [Course(record_id=COURSE_A, price=19.5), Course(record_id=COURSE_B, price=0.5)]
        registrations = [
            Registration(record_id="r1", paid=True, course_ref=course_ref(COURSE_A)),
            Registration(record_id="r2", paid=True, course_ref=course_ref(COURSE_B)),
        ]
        assert _aggregate(courses, registrations).stats.revenue == pytest.approx(20.0)


class TestStatusHistogram:
    """Status histogram buckets."""

    def test_fixed_order_and_labels(self, courses):
        """Buckets come in planned, active, completed, cancelled order."""
        summary = _aggregate(courses)
        assert [e.status for e in summary.status_histogram] == [
            "planned",
            "active",
            "completed",
            "cancelled",
        ]
        assert all(e.label for e in summary.status_histogram)

    def test_sums_to_course_count(self):
        """Counts sum to the number of courses for any status mix."""
        statuses = ["planned", "active", "active", "completed", "cancelled", "planned", "bogus"]
        courses = [Course(record_id=f"c{i}", status=s) for i, s in enumerate(statuses)]

        summary = _aggregate(courses)

        assert len(summary.status_histogram) == 4
        assert sum(e.count for e in summary.status_histogram) == len(courses)

    def test_unknown_status_counts_as_planned(self):
        """An unrecognised status lands in the planned bucket."""
        courses = [Course(record_id="c1", status="bogus")]
        assert _histogram(_aggregate(courses))["planned"] == 1


class TestRecentCourses:
    """Recent-courses selection."""

    def test_undated_courses_sort_last(self):
        """Courses without a start date come after dated ones."""
        courses = [
            Course(record_id="u1"),
            Course(record_id="d1", start_date="2025-01-01"),
            Course(record_id="u2"),
            Course(record_id="d2", start_date="2026-01-01"),
        ]
        recent = _aggregate(courses).recent_courses
        assert [c.record_id for c in recent] == ["d2", "d1", "u1", "u2"]

    def test_ties_keep_input_order(self):
        """Equal dates keep their original relative order."""
        courses = [
            Course(record_id="x", start_date="2026-01-01"),
            Course(record_id="y", start_date="2026-01-01"),
            Course(record_id="z", start_date="2026-01-01"),
        ]
        recent = _aggregate(courses).recent_courses
        assert [c.record_id for c in recent] == ["x", "y", "z"]

    def test_limit_with_many_undated(self):
        """At most five courses are returned."""
        courses = [Course(record_id=f"c{i}") for i in range(12)]
        recent = _aggregate(courses).recent_courses
        assert [c.record_id for c in recent] == ["c0", "c1", "c2", "c3", "c4"]

    def test_input_not_mutated(self):
        """Sorting works on a copy of the course list."""
        courses = [
            Course(record_id="old", start_date="2024-01-01"),
            Course(record_id="new", start_date="2026-01-01"),
        ]
        _aggregate(courses)
        assert [c.record_id for c in courses] == ["old", "new"]


class TestDeterminism:
    """Aggregation is a pure function."""

    def test_same_inputs_same_summary(self, courses, counted, registrations):
        """Two calls with identical inputs give equal summaries."""
        instructors, participants, rooms = counted
        first = aggregate(courses, instructors, participants, rooms, registrations)
        second = aggregate(courses, instructors, participants, rooms, registrations)
        assert first == second

    def test_snapshot_wrapper_matches(self, courses, counted, registrations):
        """aggregate_snapshot is aggregate over the snapshot's collections."""
        instructors, participants, rooms = counted
        snapshot = Snapshot(
            courses=courses,
            instructors=instructors,
            participants=participants,
            rooms=rooms,
            registrations=registrations,
        )
        assert aggregate_snapshot(snapshot) == aggregate(
            courses, instructors, participants, rooms, registrations
        )
