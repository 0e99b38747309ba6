#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CPU 스케줄링 시뮬레이터 - 메인 실행 파일

사용 예:
    python main.py -f data/schedule.csv
    python main.py -s data/schedule.csv
    python main.py -r 2 data/schedule.csv
    python main.py --all data/schedule.csv --chart
"""

import argparse
import logging
import os
import re
import sys

from utils.input_parser import InputParser, InputError
from utils.visualization import Visualizer
from schedulers import ALGORITHMS, DEFAULT_TIME_QUANTUM, create_scheduler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='CPU 스케줄링 알고리즘 시뮬레이터 (FCFS / SJF / Round Robin)')

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('-f', dest='algorithm', action='store_const', const='FCFS',
                       help='First Come First Served')
    group.add_argument('-s', dest='algorithm', action='store_const', const='SJF',
                       help='Shortest Job First (선점형)')
    group.add_argument('-r', dest='quantum', type=int, metavar='QUANTUM',
                       help='Round Robin (타임 퀀텀 지정)')
    group.add_argument('--all', dest='algorithm', action='store_const', const='all',
                       help='모든 알고리즘 실행 및 비교')

    parser.add_argument('schedule', nargs='?',
                        help='프로세스 스케줄 CSV 파일 (한 줄에 P<번호>,<버스트 시간>)')
    parser.add_argument('--random', type=int, metavar='N',
                        help='스케줄 파일 대신 N개의 랜덤 프로세스 생성')
    parser.add_argument('--seed', type=int, default=None, help='랜덤 시드')
    parser.add_argument('--quantum', dest='all_quantum', type=int, default=DEFAULT_TIME_QUANTUM,
                        help=f'--all 실행 시 Round Robin 타임 퀀텀 (기본값 {DEFAULT_TIME_QUANTUM})')
    parser.add_argument('--output-dir', default='simulation_results', help='결과 저장 디렉토리')
    parser.add_argument('--chart', action='store_true', help='Gantt/비교 차트 저장')
    parser.add_argument('--log-file', help='이벤트 로그 파일 경로')
    parser.add_argument('-q', '--quiet', action='store_true', help='틱별 출력 생략')
    parser.add_argument('-v', '--verbose', action='store_true', help='이벤트 로그 출력')
    return parser


def configure_logging(log_file=None, verbose=False):
    """로깅 설정"""
    level = logging.DEBUG if log_file else logging.WARNING
    if log_file:
        logging.basicConfig(filename=log_file, level=level,
                            format='%(asctime)s - %(name)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO if verbose else level,
                            format='%(levelname)s: %(message)s')


def load_table(args):
    """입력 파일 또는 랜덤 생성으로 프로세스 테이블 준비"""
    if args.random is not None:
        table = InputParser.generate_random_processes(num_processes=args.random, seed=args.seed)
        os.makedirs(args.output_dir, exist_ok=True)
        generated_file = os.path.join(args.output_dir, "generated_input.csv")
        InputParser.save_processes_to_file(table, generated_file)
        print(f"[완료] 랜덤 프로세스가 {generated_file}에 저장되었습니다")
        return table

    if not args.schedule:
        raise InputError("스케줄 파일 또는 --random 옵션이 필요합니다")
    return InputParser.parse_file(args.schedule)


def run_single_algorithm(algorithm, table, time_quantum=None, quiet=False, verbose=False):
    """단일 알고리즘 실행"""
    visualizer = Visualizer()
    on_tick = None if quiet else visualizer.print_tick

    scheduler = create_scheduler(algorithm, table, time_quantum=time_quantum, on_tick=on_tick)
    logger.info("%s 실행 중 (%d개 프로세스)", scheduler.name, len(table))
    print(scheduler.name)
    result = scheduler.run(verbose=verbose)
    visualizer.print_simulation_results(result)
    return result


def run_all_algorithms(table, time_quantum, quiet=False, verbose=False):
    """모든 알고리즘 실행"""
    results = []

    for index, key in enumerate(ALGORITHMS, 1):
        print(f"\n[{index}/{len(ALGORITHMS)}] {ALGORITHMS[key]['name']}")
        print("-"*80)
        results.append(run_single_algorithm(key, table, time_quantum, quiet, verbose))

    return results


def safe_filename(algo_name):
    """파일명 안전하게 변환"""
    safe_algo = re.sub(r'[^A-Za-z0-9]+', '_', algo_name)
    return safe_algo.strip('_')


def save_results(results, output_dir="simulation_results"):
    """Gantt 차트 및 비교 차트 저장"""
    os.makedirs(output_dir, exist_ok=True)
    visualizer = Visualizer()

    for result in results:
        save_path = os.path.join(output_dir, f"gantt_{safe_filename(result['algorithm'])}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=save_path, show=False)

    # 비교 그래프 (2개 이상일 때만)
    if len(results) > 1:
        comparison_path = os.path.join(output_dir, "comparison.png")
        visualizer.compare_algorithms(results, save_path=comparison_path, show=False)

    print(f"[완료] 차트가 '{output_dir}/' 디렉토리에 저장되었습니다")


def main(argv=None):
    """메인 함수"""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    try:
        table = load_table(args)
    except (InputError, OSError) as e:
        print(f"[오류] 프로세스 로드 실패: {e}", file=sys.stderr)
        return 1

    try:
        if args.algorithm == 'all':
            results = run_all_algorithms(table, args.all_quantum, args.quiet, args.verbose)
            Visualizer().print_statistics_table(results)
        elif args.quantum is not None:
            results = [run_single_algorithm('RoundRobin', table, args.quantum,
                                            args.quiet, args.verbose)]
        else:
            results = [run_single_algorithm(args.algorithm, table,
                                            quiet=args.quiet, verbose=args.verbose)]
    except ValueError as e:
        print(f"[오류] {e}", file=sys.stderr)
        return 1

    if args.chart:
        save_results(results, args.output_dir)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        sys.exit(0)
