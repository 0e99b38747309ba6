"""
시각화 모듈: 틱별 콘솔 출력, Gantt Chart 및 통계 그래프 생성
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict
from core.process import TickObservation
from core.scheduler_base import GanttEntry


def padding(num: int) -> int:
    """세 자리 정렬을 위한 공백 개수"""
    if num < 10:
        return 2
    elif num < 100:
        return 1
    return 0


def pad(num: int) -> str:
    return ' ' * padding(num)


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors

    @staticmethod
    def format_tick(observation: TickObservation) -> str:
        """틱 관측값을 고정 폭 한 줄로 변환"""
        o = observation
        return (f"T{o.time}{pad(o.time)} : P{o.process_number}{pad(o.process_number)} - "
                f"Burst left {pad(o.remaining_burst)}{o.remaining_burst}, "
                f"Wait time {pad(o.wait_time)}{o.wait_time}, "
                f"Turnaround time {pad(o.turnaround_time)}{o.turnaround_time}")

    def print_tick(self, observation: TickObservation):
        print(self.format_tick(observation))

    @staticmethod
    def format_simulation_results(results: Dict) -> str:
        """프로세스별 최종 대기/반환 시간과 평균"""
        lines = []
        for process in results['processes']:
            lines.append(f"\nP{process.number}")
            lines.append(f"        Waiting time:         {pad(process.wait_time)}{process.wait_time}")
            lines.append(f"        Turnaround time:      "
                         f"{pad(process.turnaround_time)}{process.turnaround_time}")

        stats = results['statistics']
        lines.append(f"\nTotal average waiting time:     {stats['avg_waiting_time']:0.1f}")
        lines.append(f"Total average turnaround time:  {stats['avg_turnaround_time']:0.1f}")
        return '\n'.join(lines)

    def print_simulation_results(self, results: Dict):
        print(self.format_simulation_results(results))

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: str = None, show: bool = True):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        # 프로세스 번호 추출 (유일한 값만)
        numbers = sorted(set(entry.process_number for entry in gantt_data))
        number_to_y = {number: idx for idx, number in enumerate(numbers)}

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time
            y_pos = number_to_y[entry.process_number]
            color = self.colors[entry.process_number % len(self.colors)]

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, edgecolor='black', linewidth=0.5)

            # 충분히 긴 경우만 텍스트 표시
            if duration > 1:
                ax.text(entry.start_time + duration/2, y_pos, f'P{entry.process_number}',
                        ha='center', va='center', fontsize=8, fontweight='bold')

        # 축 설정
        ax.set_yticks(range(len(numbers)))
        ax.set_yticklabels([f'P{number}' for number in numbers])
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [
            mpatches.Patch(color=self.colors[number % len(self.colors)], label=f'P{number}')
            for number in numbers
        ]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_algorithms(self, results: List[Dict], save_path: str = None, show: bool = True):
        """
        여러 알고리즘의 성능 비교 그래프

        Args:
            results: 각 알고리즘의 결과 리스트
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        if not results:
            print("비교할 결과가 없습니다")
            return

        algorithms = [r['algorithm'] for r in results]
        metrics = [
            ('avg_waiting_time', 'Average Waiting Time', 'skyblue', '{:.1f}'),
            ('avg_turnaround_time', 'Average Turnaround Time', 'lightcoral', '{:.1f}'),
            ('context_switches', 'Context Switches', 'plum', '{:.0f}'),
        ]

        fig, axes = plt.subplots(1, len(metrics), figsize=(18, 6))
        fig.suptitle('Scheduling Algorithms Performance Comparison',
                     fontsize=16, fontweight='bold')

        for ax, (key, title, color, fmt) in zip(axes, metrics):
            values = [r['statistics'][key] for r in results]
            bars = ax.bar(range(len(algorithms)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(algorithms)))
            ax.set_xticklabels(algorithms, rotation=30, ha='right', fontsize=9)
            ax.set_ylabel(title, fontsize=11)
            ax.set_title(f'{title} Comparison', fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)

            # 값 표시
            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                        fmt.format(value), ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"비교 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 알고리즘의 결과 리스트
        """
        print("\n" + "="*100)
        print("스케줄링 알고리즘 성능 비교")
        print("="*100)
        print(f"{'알고리즘':<35} {'평균 대기':>12} {'평균 반환':>12} {'평균 응답':>12} {'문맥전환':>12}")
        print("-"*100)

        for result in results:
            algo = result['algorithm']
            stats = result['statistics']
            print(f"{algo:<35} "
                  f"{stats['avg_waiting_time']:>12.1f} "
                  f"{stats['avg_turnaround_time']:>12.1f} "
                  f"{stats['avg_response_time']:>12.1f} "
                  f"{stats['context_switches']:>12}")

        print("="*100 + "\n")
