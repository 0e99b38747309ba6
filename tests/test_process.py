"""Tests for process records, the process table and the per-tick state advance."""

import pytest

from core.process import (Process, ProcessState, ProcessTable, SchedulerContractError,
                          TickObservation)


class TestProcessTableConstruction:
    """Validation performed before any simulation starts."""

    def test_from_pairs_assigns_arrival_by_position(self, sample_table):
        assert [p.arrival_index for p in sample_table] == [0, 1, 2]
        assert [p.number for p in sample_table] == [1, 2, 3]

    def test_counters_start_at_zero(self, sample_table):
        for process in sample_table:
            assert process.remaining_burst == process.total_burst
            assert process.wait_time == 0
            assert process.turnaround_time == 0

    def test_records_sorted_by_arrival_index(self):
        table = ProcessTable([Process(7, 2, 1), Process(4, 3, 0)])
        assert [p.number for p in table] == [4, 7]

    def test_empty_list_rejected(self):
        with pytest.raises(ValueError):
            ProcessTable.from_pairs([])

    def test_duplicate_number_rejected(self):
        with pytest.raises(ValueError, match="P1"):
            ProcessTable.from_pairs([(1, 2), (1, 3)])

    @pytest.mark.parametrize("burst", [0, -4])
    def test_non_positive_burst_rejected(self, burst):
        with pytest.raises(ValueError):
            ProcessTable.from_pairs([(1, 2), (2, burst)])

    def test_non_positive_number_rejected(self):
        with pytest.raises(ValueError):
            ProcessTable.from_pairs([(0, 2)])

    @pytest.mark.parametrize("pair", [(1, 1.5), (1, 2.0), (1.0, 2), (1, True), (True, 3), (1, "4")])
    def test_non_integer_fields_rejected(self, pair):
        with pytest.raises(ValueError, match="정수"):
            ProcessTable.from_pairs([pair])

    def test_gap_in_arrival_indices_rejected(self):
        with pytest.raises(ValueError):
            ProcessTable([Process(1, 2, 0), Process(2, 2, 2)])

    def test_copy_is_independent(self, sample_table):
        clone = sample_table.copy()
        clone.advance(0, 0)
        assert sample_table[0].remaining_burst == 5
        assert clone[0].remaining_burst == 4


class TestAdvance:
    """One time unit of simulated execution."""

    def test_returns_snapshot_taken_before_the_tick(self, sample_table):
        observation = sample_table.advance(0, 0)
        assert observation == TickObservation(0, 1, 5, 0, 0)

    def test_active_process_runs_and_others_wait(self, sample_table):
        sample_table.advance(0, 0)
        sample_table.advance(0, 1)
        p1, p2, p3 = sample_table
        assert (p1.remaining_burst, p1.wait_time, p1.turnaround_time) == (3, 0, 2)
        # P2 arrived at time 1, so only the second tick counts
        assert (p2.remaining_burst, p2.wait_time, p2.turnaround_time) == (3, 1, 1)
        # P3 has not arrived yet
        assert (p3.wait_time, p3.turnaround_time) == (0, 0)

    def test_finished_processes_stop_accumulating(self):
        table = ProcessTable.from_pairs([(1, 1), (2, 2)])
        table.advance(0, 0)
        table.advance(1, 1)
        table.advance(1, 2)
        assert table[0].turnaround_time == 1
        assert table[0].wait_time == 0
        assert table[1].turnaround_time == 2

    def test_records_start_and_finish_time(self):
        table = ProcessTable.from_pairs([(1, 2)])
        table.advance(0, 0)
        assert table[0].start_time == 0
        assert table[0].finish_time is None
        table.advance(0, 1)
        assert table[0].finish_time == 2
        assert table[0].response_time == 0

    def test_accounting_invariant_holds(self, sample_table):
        for time, index in enumerate([0, 1, 1, 0, 2, 2]):
            sample_table.advance(index, time)
            assert sample_table.is_accounting_consistent()

    def test_selecting_finished_process_fails_fast(self):
        table = ProcessTable.from_pairs([(1, 1), (2, 1)])
        table.advance(0, 0)
        with pytest.raises(SchedulerContractError):
            table.advance(0, 1)

    def test_selecting_unarrived_process_fails_fast(self, sample_table):
        with pytest.raises(SchedulerContractError):
            sample_table.advance(2, 0)
        assert sample_table[0].turnaround_time == 0

    def test_out_of_range_index_fails_fast(self, sample_table):
        with pytest.raises(SchedulerContractError):
            sample_table.advance(3, 5)


class TestProcessState:

    def test_state_transitions(self):
        process = Process(1, 1, 2)
        assert process.get_state(0) is ProcessState.NOT_ARRIVED
        assert process.get_state(2) is ProcessState.READY
        assert process.get_state(2, active=True) is ProcessState.RUNNING
        process.remaining_burst = 0
        assert process.get_state(3) is ProcessState.TERMINATED

    def test_ready_indices(self, sample_table):
        assert sample_table.ready_indices(0) == [0]
        assert sample_table.ready_indices(5) == [0, 1, 2]
