"""
棋局合法性验证器

提供跳棋棋局状态的验证功能。
"""

from typing import Any, Dict, List, Tuple

import numpy as np

from .checkers_board import CheckersBoard, Side
from .move import BOARD_SIZE


class BoardValidator:
    """
    棋局合法性验证器

    检查棋盘结构、棋子位置、棋子数量以及计数与棋盘内容的一致性。
    """

    def __init__(self):
        """初始化验证器"""
        self.valid_values = {
            CheckersBoard.EMPTY, CheckersBoard.P1_MAN, CheckersBoard.P2_MAN,
            CheckersBoard.P1_KING, CheckersBoard.P2_KING
        }

        self.piece_names = {
            0: "空", 1: "红兵", 2: "黑兵", 3: "红王", 4: "黑王"
        }

    def validate_board_structure(self, board: CheckersBoard) -> Tuple[bool, List[str]]:
        """
        验证棋盘基本结构

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        if board.board.shape != (BOARD_SIZE, BOARD_SIZE):
            errors.append(f"棋盘尺寸错误: {board.board.shape}, 应为({BOARD_SIZE}, {BOARD_SIZE})")
            return False, errors

        if not np.issubdtype(board.board.dtype, np.integer):
            errors.append(f"棋盘数据类型错误: {board.board.dtype}, 应为int")

        unknown = set(np.unique(board.board).tolist()) - self.valid_values
        if unknown:
            errors.append(f"未知的格子内容: {sorted(unknown)}")

        return len(errors) == 0, errors

    def validate_piece_positions(self, board: CheckersBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子位置：只能位于深色格，且兵不能停在己方升王行

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for pos, piece in board.get_all_pieces():
            name = self.piece_names.get(piece, str(piece))
            if not board.is_playable(pos):
                errors.append(f"{name}位于浅色格: {pos}")

            owner = CheckersBoard.owner_of(piece)
            if owner is not None and not CheckersBoard.is_king(piece) and pos[0] == owner.promotion_row:
                errors.append(f"{name}位于升王行但未升王: {pos}")

        return len(errors) == 0, errors

    def validate_piece_counts(self, board: CheckersBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子数量：每方不超过12枚，且计数与棋盘内容一致

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for side in Side:
            actual = board.count_pieces(side)
            recorded = board.piece_counts.get(side)
            if actual > CheckersBoard.PIECES_PER_SIDE:
                errors.append(f"{side.display_name}棋子数量超限: {actual} > {CheckersBoard.PIECES_PER_SIDE}")
            if recorded != actual:
                errors.append(f"{side.display_name}棋子计数不一致: 记录 {recorded}, 实际 {actual}")

        return len(errors) == 0, errors

    def full_validation(self, board: CheckersBoard) -> Tuple[bool, List[str]]:
        """
        完整的棋局验证

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        is_valid, all_errors = self.validate_board_structure(board)
        if board.board.shape != (BOARD_SIZE, BOARD_SIZE):
            return is_valid, all_errors

        for validation_func in (self.validate_piece_positions, self.validate_piece_counts):
            _, errors = validation_func(board)
            all_errors.extend(errors)

        return len(all_errors) == 0, all_errors

    def get_validation_report(self, board: CheckersBoard) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Args:
            board: 要验证的棋盘

        Returns:
            Dict[str, Any]: 验证报告
        """
        report = {
            'overall_valid': True,
            'total_errors': 0,
            'validations': {}
        }

        validation_tests = {
            'structure': self.validate_board_structure,
            'piece_positions': self.validate_piece_positions,
            'piece_counts': self.validate_piece_counts
        }

        for test_name, test_func in validation_tests.items():
            is_valid, errors = test_func(board)
            report['validations'][test_name] = {
                'valid': is_valid,
                'errors': errors,
                'error_count': len(errors)
            }

            if not is_valid:
                report['overall_valid'] = False
                report['total_errors'] += len(errors)

        return report
