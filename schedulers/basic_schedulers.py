"""
기본 스케줄링 알고리즘 구현
- FCFS (First-Come, First-Served)
- SJF (Shortest Job First - Preemptive, 남은 버스트 시간 기준)
- Round Robin
"""

from typing import Callable, Optional
from core.process import ProcessTable, TickObservation
from core.scheduler_base import BaseScheduler


class FCFSScheduler(BaseScheduler):
    """
    FCFS (First-Come, First-Served) 스케줄러
    비선점형: 도착 순서대로 각 프로세스를 버스트가 끝날 때까지 실행
    """

    def __init__(self, table: ProcessTable,
                 on_tick: Optional[Callable[[TickObservation], None]] = None):
        super().__init__(table, "First Come First Served", on_tick)
        self.cursor = 0

    def select_next_process(self) -> Optional[int]:
        """현재 프로세스가 끝났으면 다음 도착 순서로 커서 이동"""
        while self.cursor < len(self.table) and self.table[self.cursor].is_completed():
            self.cursor += 1

        if self.cursor >= len(self.table):
            return None
        return self.cursor


class SJFScheduler(BaseScheduler):
    """
    SJF (Shortest Job First) 스케줄러 - 선점형
    매 틱마다 남은 버스트 시간이 가장 짧은 프로세스를 선택
    """

    def __init__(self, table: ProcessTable,
                 on_tick: Optional[Callable[[TickObservation], None]] = None):
        super().__init__(table, "Shortest Job First", on_tick)

    def select_next_process(self) -> Optional[int]:
        """
        도착 순서로 훑으며 남은 시간이 현재 최솟값 이하인 프로세스로 교체
        동점이면 나중에 도착한 프로세스가 선택된다
        """
        selected = None
        shortest_burst = None

        for index in self.table.ready_indices(self.current_time):
            remaining = self.table[index].remaining_burst
            if shortest_burst is None or remaining <= shortest_burst:
                selected = index
                shortest_burst = remaining

        return selected


class RoundRobinScheduler(BaseScheduler):
    """
    Round Robin 스케줄러
    도착 순서로 순회하며 각 프로세스에 min(남은 시간, 타임 퀀텀)만큼 연속 실행을 부여
    """

    def __init__(self, table: ProcessTable, time_quantum: int = 4,
                 on_tick: Optional[Callable[[TickObservation], None]] = None):
        if not isinstance(time_quantum, int) or isinstance(time_quantum, bool) or time_quantum <= 0:
            raise ValueError(f"타임 퀀텀은 양의 정수여야 합니다: {time_quantum}")
        super().__init__(table, f"Round Robin with Quantum {time_quantum}", on_tick)
        self.time_quantum = time_quantum
        self.current_index: Optional[int] = None
        self.slice_remaining = 0

    def select_next_process(self) -> Optional[int]:
        # 부여된 구간이 남아있으면 계속 실행
        if self.current_index is not None and self.slice_remaining > 0:
            self.slice_remaining -= 1
            return self.current_index

        next_index = self._find_next_ready()
        if next_index is None:
            return None

        process = self.table[next_index]
        self.current_index = next_index
        self.slice_remaining = min(process.remaining_burst, self.time_quantum) - 1
        self.log_event(f"P{process.number} granted {self.slice_remaining + 1} tick(s)")
        return next_index

    def _find_next_ready(self) -> Optional[int]:
        """현재 위치 다음부터 순환하며 도착했고 미완료인 프로세스 탐색"""
        count = len(self.table)
        start = 0 if self.current_index is None else self.current_index + 1

        for offset in range(count):
            index = (start + offset) % count
            if self.table[index].is_ready(self.current_time):
                return index
        return None
