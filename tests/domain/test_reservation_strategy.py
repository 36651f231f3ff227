"""Unit tests for the FIFO / LIFO batch selection strategies."""

import itertools

import pytest

from batchstock.domain.exceptions import InvalidRequestError
from batchstock.domain.service.reservation_strategy import (
    ReservationStrategy,
    order_batches,
    select,
)
from tests.fakes import make_batch

FIFO = ReservationStrategy.FIFO
LIFO = ReservationStrategy.LIFO


def _smartphone_batches():
    return [
        make_batch(9, 29, "2026-05-31"),
        make_batch(10, 83, "2026-11-15"),
    ]


def _pairs(plan):
    return [(a.batch_id, a.quantity_taken) for a in plan.allocations]


class TestStrategyParsing:

    def test_parse_is_case_insensitive(self):
        assert ReservationStrategy.parse("FIFO") is FIFO
        assert ReservationStrategy.parse(" lifo ") is LIFO

    def test_parse_passes_members_through(self):
        assert ReservationStrategy.parse(LIFO) is LIFO

    def test_unknown_strategy_rejected(self):
        with pytest.raises(InvalidRequestError, match="Unknown reservation strategy"):
            ReservationStrategy.parse("random")


class TestFifo:

    def test_small_request_taken_from_earliest_batch(self):
        plan = select(FIFO, _smartphone_batches(), 3)
        assert _pairs(plan) == [(9, 3)]
        assert plan.fulfilled

    def test_spills_into_next_batch(self):
        plan = select(FIFO, _smartphone_batches(), 40)
        assert _pairs(plan) == [(9, 29), (10, 11)]
        assert plan.fulfilled

    def test_input_order_does_not_matter(self):
        batches = list(reversed(_smartphone_batches()))
        assert _pairs(select(FIFO, batches, 3)) == [(9, 3)]

    def test_exact_total_is_fulfilled(self):
        plan = select(FIFO, _smartphone_batches(), 112)
        assert plan.fulfilled
        assert plan.reserved_quantity == 112


class TestLifo:

    def test_request_taken_from_latest_batch(self):
        plan = select(LIFO, _smartphone_batches(), 50)
        assert _pairs(plan) == [(10, 50)]
        assert plan.fulfilled

    def test_spills_into_earlier_batch(self):
        plan = select(LIFO, _smartphone_batches(), 90)
        assert _pairs(plan) == [(10, 83), (9, 7)]


class TestPartialAndEdgeCases:

    def test_shortage_gives_unfulfilled_plan(self):
        plan = select(FIFO, _smartphone_batches(), 200)
        assert not plan.fulfilled
        assert plan.reserved_quantity == 112
        assert plan.shortfall == 88
        assert _pairs(plan) == [(9, 29), (10, 83)]

    def test_shortage_does_not_mutate_batches(self):
        batches = _smartphone_batches()
        select(FIFO, batches, 200)
        assert [b.remaining_quantity for b in batches] == [29, 83]

    def test_zero_quantity_batches_skipped(self):
        batches = [
            make_batch(1, 0, "2026-01-01"),
            make_batch(2, 5, "2026-02-01"),
        ]
        plan = select(FIFO, batches, 3)
        assert plan.batch_ids == [2]

    def test_no_batches_gives_empty_unfulfilled_plan(self):
        plan = select(FIFO, [], 1)
        assert plan.allocations == ()
        assert not plan.fulfilled

    @pytest.mark.parametrize("qty", [0, -3, True, "5", None])
    def test_invalid_quantity_rejected(self, qty):
        with pytest.raises(InvalidRequestError):
            select(FIFO, _smartphone_batches(), qty)


class TestTieBreaking:

    def _same_day(self):
        return [
            make_batch(21, 4, "2026-07-01"),
            make_batch(22, 4, "2026-07-01"),
            make_batch(23, 4, "2026-07-01"),
        ]

    def test_fifo_keeps_insertion_order_on_ties(self):
        assert [b.batch_id for b in order_batches(FIFO, self._same_day())] == [21, 22, 23]

    def test_lifo_keeps_insertion_order_on_ties(self):
        batches = self._same_day() + [make_batch(24, 4, "2026-09-01")]
        assert [b.batch_id for b in order_batches(LIFO, batches)] == [24, 21, 22, 23]


class TestPlanProperties:
    """Exhaustive check over small batch sets."""

    QUANTITIES = [0, 1, 3, 7]
    EXPIRIES = ["2026-03-01", "2026-01-01", "2026-02-01"]

    def _batch_sets(self):
        for qtys in itertools.product(self.QUANTITIES, repeat=3):
            yield [
                make_batch(i + 1, q, self.EXPIRIES[i])
                for i, q in enumerate(qtys)
            ]

    @pytest.mark.parametrize("strategy", [FIFO, LIFO])
    def test_plans_respect_quantities_and_order(self, strategy):
        for batches in self._batch_sets():
            total = sum(b.remaining_quantity for b in batches)
            by_id = {b.batch_id: b for b in batches}
            for requested in range(1, total + 3):
                plan = select(strategy, batches, requested)

                assert plan.fulfilled == (total >= requested)
                if plan.fulfilled:
                    assert plan.reserved_quantity == requested
                for a in plan.allocations:
                    assert 0 < a.quantity_taken <= by_id[a.batch_id].remaining_quantity

                dates = [by_id[i].expiry_date for i in plan.batch_ids]
                if strategy is FIFO:
                    assert dates == sorted(dates)
                else:
                    assert dates == sorted(dates, reverse=True)

                # every batch but the last is drained completely
                for a in plan.allocations[:-1]:
                    assert a.quantity_taken == by_id[a.batch_id].remaining_quantity
