"""
프로세스 레코드 및 프로세스 테이블 관리 모듈
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple
from copy import deepcopy


class SchedulerContractError(RuntimeError):
    """
    스케줄러 계약 위반
    종료되었거나 아직 도착하지 않은 프로세스가 선택된 경우 발생 (프로그래밍 오류)
    """


class ProcessState(Enum):
    """프로세스 상태"""
    NOT_ARRIVED = "Not Arrived"
    READY = "Ready"
    RUNNING = "Running"
    TERMINATED = "Terminated"


@dataclass(frozen=True)
class TickObservation:
    """한 시간 단위의 관측값 (틱 시작 시점의 활성 프로세스 상태)"""
    time: int
    process_number: int
    remaining_burst: int
    wait_time: int
    turnaround_time: int


class Process:
    """
    프로세스 레코드
    번호, 도착 순서, 버스트 시간과 누적 대기/반환 시간을 관리
    """

    def __init__(self, number: int, burst_time: int, arrival_index: int = 0):
        """
        프로세스 초기화

        Args:
            number: 프로세스 번호
            burst_time: 총 CPU 버스트 시간
            arrival_index: 입력 순서 (도착 시간과 동일)
        """
        self.number = number
        self.arrival_index = arrival_index
        self.total_burst = burst_time
        self.remaining_burst = burst_time

        # 틱마다 누적되는 카운터
        self.wait_time = 0
        self.turnaround_time = 0

        # 통계 정보
        self.start_time: Optional[int] = None  # 첫 실행 시간
        self.finish_time: Optional[int] = None  # 완료 시간

    @property
    def response_time(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_index

    def has_arrived(self, time_elapsed: int) -> bool:
        return self.arrival_index <= time_elapsed

    def is_completed(self) -> bool:
        """프로세스가 완료되었는지 확인"""
        return self.remaining_burst == 0

    def is_ready(self, time_elapsed: int) -> bool:
        """도착했고 아직 완료되지 않았는지 확인"""
        return self.has_arrived(time_elapsed) and not self.is_completed()

    def get_executed_time(self) -> int:
        """지금까지 실행된 시간"""
        return self.total_burst - self.remaining_burst

    def get_state(self, time_elapsed: int, active: bool = False) -> ProcessState:
        if self.is_completed():
            return ProcessState.TERMINATED
        if not self.has_arrived(time_elapsed):
            return ProcessState.NOT_ARRIVED
        return ProcessState.RUNNING if active else ProcessState.READY

    def snapshot(self, time_elapsed: int) -> TickObservation:
        return TickObservation(time_elapsed, self.number, self.remaining_burst,
                               self.wait_time, self.turnaround_time)

    def __repr__(self):
        return f"P{self.number}[{self.remaining_burst}/{self.total_burst}]"

    def __str__(self):
        return f"Process {self.number}: Arrival={self.arrival_index}, " \
               f"Burst={self.total_burst}, Remaining={self.remaining_burst}"


class ProcessTable:
    """
    프로세스 테이블
    도착 순서대로 정렬된 프로세스 레코드 목록. 레코드는 삭제되지 않으며
    완료 여부는 remaining_burst == 0 으로 판단한다.
    """

    def __init__(self, processes: Iterable[Process]):
        records = sorted(processes, key=lambda p: p.arrival_index)

        # 입력 검증
        if not records:
            raise ValueError("프로세스 목록이 비어있습니다")

        seen = set()
        for position, process in enumerate(records):
            if process.arrival_index != position:
                raise ValueError(f"P{process.number}의 도착 순서가 올바르지 않습니다: "
                                 f"{process.arrival_index} (예상: {position})")
            # bool은 int의 하위 클래스이므로 별도로 제외
            for field, value in (('프로세스 번호', process.number), ('버스트 시간', process.total_burst)):
                if not isinstance(value, int) or isinstance(value, bool):
                    raise ValueError(f"{field}는 정수여야 합니다: {value!r}")
            if process.number <= 0:
                raise ValueError(f"프로세스 번호는 양수여야 합니다: {process.number}")
            if process.total_burst <= 0:
                raise ValueError(f"P{process.number}의 버스트 시간은 양수여야 합니다: "
                                 f"{process.total_burst}")
            if process.number in seen:
                raise ValueError(f"중복된 프로세스 번호: P{process.number}")
            seen.add(process.number)

        self._records: List[Process] = records

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, int]]) -> "ProcessTable":
        """(프로세스 번호, 버스트 시간) 쌍 목록으로 테이블 생성. 목록 위치가 도착 순서가 된다."""
        return cls(Process(number, burst, index)
                   for index, (number, burst) in enumerate(pairs))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Process]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Process:
        return self._records[index]

    def copy(self) -> "ProcessTable":
        """
        테이블의 깊은 복사본 생성
        각 스케줄링 알고리즘 시뮬레이션을 독립적으로 수행하기 위함
        """
        return deepcopy(self)

    def ready_indices(self, time_elapsed: int) -> List[int]:
        """도착했고 완료되지 않은 프로세스의 인덱스 (도착 순서)"""
        return [i for i, p in enumerate(self._records) if p.is_ready(time_elapsed)]

    def is_all_completed(self) -> bool:
        return all(p.is_completed() for p in self._records)

    def get_total_burst_time(self) -> int:
        return sum(p.total_burst for p in self._records)

    def is_accounting_consistent(self) -> bool:
        """모든 프로세스에 대해 반환 시간 == 대기 시간 + 실행 시간 인지 확인"""
        return all(p.turnaround_time == p.wait_time + p.get_executed_time()
                   for p in self._records)

    def advance(self, active_index: int, time_elapsed: int) -> TickObservation:
        """
        활성 프로세스를 한 시간 단위 실행하고 모든 프로세스의 카운터를 갱신

        Args:
            active_index: 실행할 프로세스의 인덱스
            time_elapsed: 현재 시뮬레이션 시간

        Returns:
            틱 시작 시점의 활성 프로세스 관측값
        """
        if not 0 <= active_index < len(self._records):
            raise SchedulerContractError(f"잘못된 프로세스 인덱스: {active_index}")

        active = self._records[active_index]
        if active.is_completed():
            raise SchedulerContractError(f"이미 완료된 P{active.number}는 실행할 수 없습니다")
        if not active.has_arrived(time_elapsed):
            raise SchedulerContractError(f"아직 도착하지 않은 P{active.number}는 실행할 수 없습니다 "
                                         f"(T={time_elapsed})")

        observation = active.snapshot(time_elapsed)

        for index, process in enumerate(self._records):
            if process.is_ready(time_elapsed):
                if index != active_index:
                    process.wait_time += 1
                process.turnaround_time += 1

        if active.start_time is None:
            active.start_time = time_elapsed
        active.remaining_burst -= 1
        if active.is_completed():
            active.finish_time = time_elapsed + 1

        return observation
