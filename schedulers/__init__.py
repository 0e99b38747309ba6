"""
CPU Scheduling Algorithms
"""

from typing import Callable, Optional
from core.process import ProcessTable, TickObservation
from core.scheduler_base import BaseScheduler
from .basic_schedulers import FCFSScheduler, SJFScheduler, RoundRobinScheduler

DEFAULT_TIME_QUANTUM = 4

# 사용 가능한 알고리즘 정의
ALGORITHMS = {
    'FCFS': {
        'name': 'First Come First Served',
        'flag': '-f',
        'class': FCFSScheduler,
        'preemptive': False,
        'params': {}
    },
    'SJF': {
        'name': 'Shortest Job First (Preemptive)',
        'flag': '-s',
        'class': SJFScheduler,
        'preemptive': True,
        'params': {}
    },
    'RoundRobin': {
        'name': 'Round Robin',
        'flag': '-r',
        'class': RoundRobinScheduler,
        'preemptive': True,
        'params': {'time_quantum': DEFAULT_TIME_QUANTUM}
    },
}


def create_scheduler(algorithm: str, table: ProcessTable,
                     time_quantum: Optional[int] = None,
                     on_tick: Optional[Callable[[TickObservation], None]] = None) -> BaseScheduler:
    """
    알고리즘 이름으로 스케줄러 생성

    Args:
        algorithm: ALGORITHMS의 키
        table: 프로세스 테이블 (스케줄러는 복사본을 사용)
        time_quantum: Round Robin 타임 퀀텀 (None이면 기본값)
        on_tick: 틱마다 호출될 콜백
    """
    if algorithm not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algorithm}")

    algo_info = ALGORITHMS[algorithm]
    params = algo_info['params'].copy()
    if 'time_quantum' in params and time_quantum is not None:
        params['time_quantum'] = time_quantum

    return algo_info['class'](table, on_tick=on_tick, **params)


__all__ = [
    'ALGORITHMS',
    'DEFAULT_TIME_QUANTUM',
    'create_scheduler',
    'FCFSScheduler',
    'SJFScheduler',
    'RoundRobinScheduler'
]
