"""
스케줄러 기본 프레임워크 및 통계 관리
"""

import logging
from typing import Callable, List, Dict, Optional
from dataclasses import dataclass
from enum import Enum
from .process import Process, ProcessTable, SchedulerContractError, TickObservation

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    """시뮬레이션 상태"""
    RUNNING = "Running"
    COMPLETED = "Completed"


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리 (한 프로세스가 연속으로 실행된 구간)"""
    process_number: int
    start_time: int
    end_time: int


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.total_waiting_time = 0
        self.total_turnaround_time = 0
        self.total_response_time = 0
        self.total_burst_time = 0
        self.context_switches = 0
        self.cpu_busy_time = 0
        self.total_simulation_time = 0
        self.process_count = 0

    def collect(self, table: ProcessTable):
        """완료된 프로세스 테이블로부터 합계 계산"""
        self.process_count = len(table)
        self.total_waiting_time = sum(p.wait_time for p in table)
        self.total_turnaround_time = sum(p.turnaround_time for p in table)
        self.total_response_time = sum(p.response_time or 0 for p in table)
        self.total_burst_time = table.get_total_burst_time()

    def calculate_averages(self) -> Dict:
        """평균 계산"""
        if self.process_count == 0:
            return {
                'avg_waiting_time': 0.0,
                'avg_turnaround_time': 0.0,
                'avg_response_time': 0.0,
                'cpu_utilization': 0.0,
                'context_switches': 0
            }

        return {
            'avg_waiting_time': self.total_waiting_time / self.process_count,
            'avg_turnaround_time': self.total_turnaround_time / self.process_count,
            'avg_response_time': self.total_response_time / self.process_count,
            # 도착 순서 = 도착 시간이므로 유휴 틱이 없어 항상 100
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else 0.0,
            'context_switches': self.context_switches
        }


class BaseScheduler:
    """
    기본 스케줄러 클래스
    매 틱마다 select_next_process()로 활성 프로세스를 고르고 테이블을 한 단위 진행시킨다.
    하위 클래스는 select_next_process()만 구현하면 된다.
    """

    def __init__(self, table: ProcessTable, name: str = "Base Scheduler",
                 on_tick: Optional[Callable[[TickObservation], None]] = None):
        # 각 시뮬레이션은 자신만의 테이블 복사본을 소유
        self.table = table.copy()
        self.name = name
        self.on_tick = on_tick
        self.current_time = 0
        self.state = SimulationState.RUNNING
        self.running_index: Optional[int] = None
        self.previous_index: Optional[int] = None

        self.ticks: List[TickObservation] = []
        self.completion_order: List[int] = []
        self.gantt_chart: List[GanttEntry] = []
        self.stats = SchedulerStats()
        self.event_log: List[str] = []

    @property
    def processes(self) -> List[Process]:
        return list(self.table)

    @property
    def running_process(self) -> Optional[Process]:
        if self.running_index is None:
            return None
        return self.table[self.running_index]

    def log_event(self, message: str):
        """이벤트 로그 기록"""
        log_entry = f"[T={self.current_time:3d}] {message}"
        self.event_log.append(log_entry)
        logger.debug("%s %s", self.name, log_entry)

    def add_to_gantt_chart(self, process_number: int, start: int, end: int):
        """Gantt Chart에 엔트리 추가 (같은 프로세스의 연속 구간은 병합)"""
        if start >= end:
            return
        if self.gantt_chart:
            last = self.gantt_chart[-1]
            if last.process_number == process_number and last.end_time == start:
                last.end_time = end
                return
        self.gantt_chart.append(GanttEntry(process_number, start, end))

    def context_switch(self, new_index: int):
        """
        활성 프로세스 변경 기록
        문맥교환 비용은 모델링하지 않으며 횟수만 센다
        """
        new_process = self.table[new_index]
        if self.previous_index is not None and self.previous_index != new_index:
            previous = self.table[self.previous_index]
            if not previous.is_completed():
                self.log_event(f"P{previous.number} preempted → Ready")
            self.stats.context_switches += 1
            self.log_event(f"Context Switch: P{previous.number} → P{new_process.number}")

        if self.previous_index != new_index:
            self.log_event(f"P{new_process.number} → Running")

        self.previous_index = new_index
        self.running_index = new_index

    def handle_process_arrival(self):
        """이번 틱에 도착한 프로세스 기록"""
        for process in self.table:
            if process.arrival_index == self.current_time:
                self.log_event(f"P{process.number} arrived → Ready")

    def terminate_process(self, process: Process):
        """프로세스 종료 처리"""
        self.completion_order.append(process.number)
        self.running_index = None
        self.log_event(f"P{process.number} → Terminated "
                       f"(WT={process.wait_time}, TT={process.turnaround_time})")

    def select_next_process(self) -> Optional[int]:
        """
        다음 틱에 실행할 프로세스 인덱스 선택 (하위 클래스에서 구현)

        Returns:
            선택된 프로세스 인덱스 또는 None
        """
        raise NotImplementedError("Subclasses must implement select_next_process()")

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인"""
        return self.state == SimulationState.COMPLETED

    def execute_one_step(self) -> bool:
        """
        한 시간 단위 실행

        Returns:
            시뮬레이션 완료 여부
        """
        if self.is_simulation_complete():
            return True

        if self.current_time == 0:
            self.log_event(f"===== {self.name} Scheduling Started =====")

        self.handle_process_arrival()

        index = self.select_next_process()
        if index is None:
            raise SchedulerContractError(
                f"{self.name}: 미완료 프로세스가 남아있지만 선택된 프로세스가 없습니다 "
                f"(T={self.current_time})")

        self.context_switch(index)

        observation = self.table.advance(index, self.current_time)
        self.ticks.append(observation)
        self.stats.cpu_busy_time += 1
        if self.on_tick is not None:
            self.on_tick(observation)

        process = self.table[index]
        self.add_to_gantt_chart(process.number, self.current_time, self.current_time + 1)
        self.current_time += 1

        if process.is_completed():
            self.terminate_process(process)

        if self.table.is_all_completed():
            self.state = SimulationState.COMPLETED
            self.log_event(f"===== {self.name} Scheduling Completed =====")

        return self.is_simulation_complete()

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 상세 로그 출력 여부

        Returns:
            시뮬레이션 결과 딕셔너리
        """
        while not self.execute_one_step():
            pass

        if verbose:
            for log in self.event_log:
                print(log)

        return self.get_results()

    def get_current_snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 반환 (실시간 스트리밍용)

        Returns:
            현재 상태 딕셔너리
        """
        return {
            'time': self.current_time,
            'state': self.state.value,
            'running': self.running_process,
            'ready': [self.table[i] for i in self.table.ready_indices(self.current_time)
                      if i != self.running_index],
            'terminated': [p for p in self.table if p.is_completed()],
            'context_switches': self.stats.context_switches,
            'latest_tick': self.ticks[-1] if self.ticks else None,
            'latest_log': self.event_log[-1] if self.event_log else ""
        }

    def update_statistics(self):
        """최종 통계 업데이트"""
        self.stats.total_simulation_time = self.current_time
        self.stats.collect(self.table)

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과 반환

        Returns:
            결과 딕셔너리 (통계, Gantt Chart, 틱 관측값, 로그 등)
        """
        self.update_statistics()

        return {
            'algorithm': self.name,
            'statistics': self.stats.calculate_averages(),
            'gantt_chart': self.gantt_chart,
            'event_log': self.event_log,
            'processes': self.processes,
            'ticks': self.ticks,
            'completion_order': self.completion_order
        }
