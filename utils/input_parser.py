"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import csv
import logging
import random
from typing import List, Tuple
from core.process import ProcessTable

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """입력 파일 형식 오류"""


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> ProcessTable:
        """
        CSV 파일에서 프로세스 정보 읽기

        파일 형식: 프로세스번호,버스트시간 (한 줄에 하나, 줄 순서가 도착 순서)
        예: P1,5

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 테이블
        """
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                pairs = InputParser.parse_lines(f)
        except UnicodeDecodeError as e:
            raise InputError(f"{filename}은 UTF-8 텍스트 파일이 아닙니다: {e}") from e

        logger.info("%s에서 %d개의 프로세스를 로드했습니다", filename, len(pairs))
        return InputParser.build_table(pairs)

    @staticmethod
    def parse_lines(lines) -> List[Tuple[int, int]]:
        """텍스트 라인에서 (프로세스 번호, 버스트 시간) 쌍 목록 추출"""
        pairs = []

        for line_no, row in enumerate(csv.reader(lines), 1):
            # 주석 및 빈 줄 제거
            if not row or not ''.join(row).strip() or row[0].strip().startswith('#'):
                continue

            try:
                pairs.append(InputParser._parse_row(row))
            except ValueError as e:
                raise InputError(f"{line_no}번째 줄 파싱 실패: {','.join(row)} ({e})") from e

        return pairs

    @staticmethod
    def _parse_row(row: List[str]) -> Tuple[int, int]:
        """CSV 행을 (번호, 버스트 시간)으로 변환"""
        fields = [field.strip() for field in row if field.strip()]
        if len(fields) != 2:
            raise ValueError(f"2개 필드가 필요하지만 {len(fields)}개가 있습니다")

        number_str, burst_str = fields
        if number_str[:1] in ('P', 'p'):
            number_str = number_str[1:]

        number = int(number_str)
        burst_time = int(burst_str)

        # 검증: 음수 값 체크
        if number <= 0:
            raise ValueError(f"프로세스 번호는 양수여야 합니다: {number}")
        if burst_time <= 0:
            raise ValueError(f"버스트 시간은 양수여야 합니다: {burst_time}")

        return number, burst_time

    @staticmethod
    def build_table(pairs: List[Tuple[int, int]]) -> ProcessTable:
        """쌍 목록을 검증하여 프로세스 테이블 생성"""
        try:
            return ProcessTable.from_pairs(pairs)
        except ValueError as e:
            raise InputError(str(e)) from e

    @staticmethod
    def generate_random_processes(num_processes: int = 5,
                                  max_burst: int = 10,
                                  seed: int = None) -> ProcessTable:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_burst: 최대 버스트 시간
            seed: 랜덤 시드
        """
        rng = random.Random(seed)
        pairs = [(i, rng.randint(1, max_burst)) for i in range(1, num_processes + 1)]

        logger.info("%d개의 랜덤 프로세스를 생성했습니다", num_processes)
        return InputParser.build_table(pairs)

    @staticmethod
    def save_processes_to_file(table: ProcessTable, filename: str):
        """
        프로세스 테이블을 파일로 저장

        Args:
            table: 저장할 프로세스 테이블
            filename: 출력 파일 경로
        """
        with open(filename, 'w', encoding='utf-8') as f:
            f.write("# CPU Scheduling Simulator Input Data\n")
            f.write("# Format: P<number>,<burst time> (line order = arrival order)\n")

            for process in table:
                f.write(f"P{process.number},{process.total_burst}\n")

        logger.info("%d개의 프로세스를 %s에 저장했습니다", len(table), filename)

    @staticmethod
    def print_process_summary(table: ProcessTable):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*40)
        print("프로세스 요약")
        print("="*40)
        print(f"{'PID':<6} {'도착순서':>8} {'버스트':>10}")
        print("-"*40)

        for p in table:
            print(f"P{p.number:<5} {p.arrival_index:>8} {p.total_burst:>10}")

        print("="*40)
        print(f"전체 프로세스: {len(table)}개, 총 버스트 시간: {table.get_total_burst_time()}\n")
