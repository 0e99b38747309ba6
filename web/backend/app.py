"""
CPU 스케줄링 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError
from typing import List, Optional, Dict, Any
from dataclasses import asdict
import asyncio
import logging

from core.process import ProcessTable
from core.scheduler_base import BaseScheduler
from schedulers import ALGORITHMS, DEFAULT_TIME_QUANTUM, create_scheduler

logger = logging.getLogger(__name__)

app = FastAPI(
    title="CPU Scheduling Simulator",
    description="FCFS / SJF / Round Robin CPU 스케줄링 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    number: int = Field(gt=0)
    burst_time: int = Field(gt=0)


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    algorithms: List[str]
    time_quantum: int = Field(default=DEFAULT_TIME_QUANTUM, gt=0)
    include_ticks: bool = True


class TickResult(BaseModel):
    time: int
    process_number: int
    remaining_burst: int
    wait_time: int
    turnaround_time: int


class GanttEntry(BaseModel):
    process_number: int
    start_time: int
    end_time: int


class ProcessResult(BaseModel):
    number: int
    arrival_index: int
    burst_time: int
    waiting_time: int
    turnaround_time: int
    response_time: Optional[int]
    finish_time: Optional[int]


class SimulationResult(BaseModel):
    algorithm: str
    ticks: List[TickResult]
    gantt_chart: List[GanttEntry]
    processes: List[ProcessResult]
    completion_order: List[int]
    statistics: Dict[str, float]
    event_log: List[str]


def create_process_table(process_inputs: List[ProcessInput]) -> ProcessTable:
    """ProcessInput 목록을 프로세스 테이블로 변환 (목록 순서 = 도착 순서)"""
    return ProcessTable.from_pairs((p.number, p.burst_time) for p in process_inputs)


def serialize_result(result: Dict, include_ticks: bool = True) -> Dict:
    """스케줄러 결과를 JSON 직렬화 가능한 딕셔너리로 변환"""
    return {
        'algorithm': result['algorithm'],
        'ticks': [asdict(t) for t in result['ticks']] if include_ticks else [],
        'gantt_chart': [asdict(entry) for entry in result['gantt_chart']],
        'processes': [
            {
                'number': p.number,
                'arrival_index': p.arrival_index,
                'burst_time': p.total_burst,
                'waiting_time': p.wait_time,
                'turnaround_time': p.turnaround_time,
                'response_time': p.response_time,
                'finish_time': p.finish_time
            }
            for p in result['processes']
        ],
        'completion_order': result['completion_order'],
        'statistics': result['statistics'],
        'event_log': result['event_log']
    }


def run_scheduler(table: ProcessTable, algorithm: str,
                  time_quantum: int = DEFAULT_TIME_QUANTUM,
                  include_ticks: bool = True) -> Dict:
    """스케줄러 실행 및 결과 반환"""
    scheduler = create_scheduler(algorithm, table, time_quantum=time_quantum)
    result = scheduler.run()
    logger.info("%s completed in %d ticks", scheduler.name, scheduler.current_time)
    return serialize_result(result, include_ticks)


@app.get("/")
async def root():
    return {"message": "CPU Scheduling Simulator API", "version": "1.0.0"}


@app.get("/algorithms")
async def get_algorithms():
    """사용 가능한 알고리즘 목록 반환"""
    return {
        "algorithms": [
            {"id": key, "name": info['name'], "preemptive": info['preemptive']}
            for key, info in ALGORITHMS.items()
        ],
        "default_time_quantum": DEFAULT_TIME_QUANTUM
    }


@app.post("/simulate", response_model=Dict[str, Any])
async def simulate(request: SimulationRequest):
    """스케줄링 시뮬레이션 실행"""
    try:
        table = create_process_table(request.processes)
        results = [
            SimulationResult(**run_scheduler(table, algorithm, request.time_quantum,
                                             request.include_ticks)).model_dump()
            for algorithm in request.algorithms
        ]
        return {"success": True, "results": results}

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/simulate/compare")
async def compare_algorithms(request: SimulationRequest):
    """여러 알고리즘 비교 시뮬레이션"""
    try:
        table = create_process_table(request.processes)
        comparison = {
            'algorithms': [],
            'avg_waiting_time': [],
            'avg_turnaround_time': [],
            'context_switches': []
        }

        for algorithm in request.algorithms:
            result = run_scheduler(table, algorithm, request.time_quantum, include_ticks=False)

            # 비교 데이터 수집
            stats = result['statistics']
            comparison['algorithms'].append(algorithm)
            comparison['avg_waiting_time'].append(round(stats['avg_waiting_time'], 1))
            comparison['avg_turnaround_time'].append(round(stats['avg_turnaround_time'], 1))
            comparison['context_switches'].append(stats['context_switches'])

        return {"success": True, "comparison": comparison}

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


class RealtimeSimulator:
    """WebSocket 연결 하나가 소유하는 단계별 시뮬레이터"""

    def __init__(self, table: ProcessTable, algorithm: str,
                 time_quantum: int = DEFAULT_TIME_QUANTUM):
        self.algorithm = algorithm
        self.scheduler: BaseScheduler = create_scheduler(algorithm, table, time_quantum=time_quantum)
        self.is_complete = False
        self.last_log_index = 0

    def step(self) -> Dict:
        """한 스텝 실행 및 상태 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.execute_one_step()
        snapshot = self.scheduler.get_current_snapshot()

        # 새로운 로그
        new_logs = self.scheduler.event_log[self.last_log_index:]
        self.last_log_index = len(self.scheduler.event_log)

        stats = {
            'current_time': self.scheduler.current_time,
            'context_switches': self.scheduler.stats.context_switches,
            'completed': len(snapshot['terminated']),
            'total': len(self.scheduler.table)
        }

        if is_complete:
            self.is_complete = True
            self.scheduler.update_statistics()
            stats['final'] = self.scheduler.stats.calculate_averages()

        return {
            'complete': is_complete,
            'tick': asdict(snapshot['latest_tick']),
            'ready': [p.number for p in snapshot['ready']],
            'new_logs': new_logs,
            'stats': stats
        }


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            message = await websocket.receive_json()
            action = message.get('action')

            if action == 'init':
                try:
                    inputs = [ProcessInput.model_validate(p) for p in message['processes']]
                    table = create_process_table(inputs)
                    simulator = RealtimeSimulator(
                        table,
                        message['algorithm'],
                        message.get('time_quantum', DEFAULT_TIME_QUANTUM)
                    )
                except (KeyError, TypeError, ValueError, ValidationError) as e:
                    await websocket.send_json({'type': 'error', 'message': str(e)})
                    continue

                await websocket.send_json({
                    'type': 'initialized',
                    'algorithm': simulator.scheduler.name,
                    'process_count': len(table)
                })

            elif action == 'step':
                if simulator is None:
                    await websocket.send_json({'type': 'error', 'message': 'not initialized'})
                    continue
                await websocket.send_json({'type': 'step_result', **simulator.step()})

            elif action == 'run':
                # 자동 실행 (속도 조절 가능)
                if simulator is None:
                    await websocket.send_json({'type': 'error', 'message': 'not initialized'})
                    continue
                speed = message.get('speed', 10.0)
                if not isinstance(speed, (int, float)) or isinstance(speed, bool) or speed <= 0:
                    await websocket.send_json({'type': 'error',
                                               'message': f'speed must be a positive number: {speed!r}'})
                    continue
                delay = 1.0 / speed

                while not simulator.is_complete:
                    result = simulator.step()
                    await websocket.send_json({'type': 'step_result', **result})
                    if result['complete']:
                        break
                    await asyncio.sleep(delay)

            else:
                await websocket.send_json({'type': 'error', 'message': f'unknown action: {action}'})

    except WebSocketDisconnect:
        logger.info("realtime client disconnected")


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "기본 테스트 (3개 프로세스)",
                "processes": [
                    {"number": 1, "burst_time": 5},
                    {"number": 2, "burst_time": 3},
                    {"number": 3, "burst_time": 8}
                ]
            },
            {
                "name": "동일 버스트 (SJF 동점 처리)",
                "processes": [
                    {"number": 1, "burst_time": 4},
                    {"number": 2, "burst_time": 2},
                    {"number": 3, "burst_time": 2},
                    {"number": 4, "burst_time": 6}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
