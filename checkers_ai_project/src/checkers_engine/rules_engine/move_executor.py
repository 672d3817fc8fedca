"""
走法执行器

在棋盘上执行走法：移动棋子、升王、移除被吃棋子、判断胜负以及连跳。
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .checkers_board import CheckersBoard, Side
from .move import Move
from .rule_engine import RuleEngine
from ..utils.exceptions import InvalidMoveError

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """走法执行结果"""
    move: Move
    side: Side
    promoted: bool = False                   # 本步是否升王
    captured_piece: int = CheckersBoard.EMPTY
    winner: Optional[Side] = None            # 吃光对方棋子时的胜者
    next_captures: List[Move] = field(default_factory=list)  # 连跳时可继续的吃子走法

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    @property
    def must_continue(self) -> bool:
        """同一棋子是否必须继续跳吃"""
        return bool(self.next_captures)


class MoveExecutor:
    """
    走法执行器

    直接修改传入的棋盘。调用方负责保证走法来自合法走法集合。
    """

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        self.rule_engine = rule_engine or RuleEngine()

    def apply_move(self, board: CheckersBoard, move: Move) -> ExecutionResult:
        """
        执行走法

        Args:
            board: 棋盘状态，会被原地修改
            move: 要执行的走法

        Returns:
            ExecutionResult: 执行结果
        """
        piece = board.get_piece_at(move.from_pos)
        side = CheckersBoard.owner_of(piece)
        if side is None:
            raise InvalidMoveError(move.to_coordinate_notation(), "起点没有棋子")
        if not board.is_empty(move.to_pos):
            raise InvalidMoveError(move.to_coordinate_notation(), "终点已有棋子")
        if move.is_capture and Move.between(move.from_pos, move.to_pos).captured_pos != move.captured_pos:
            raise InvalidMoveError(move.to_coordinate_notation(), "被吃位置与跳跃路线不符")

        result = ExecutionResult(move=move, side=side)

        # 1. 移动棋子
        board.relocate(move.from_pos, move.to_pos)

        # 2. 升王，在判断连跳之前完成
        if not CheckersBoard.is_king(piece) and move.to_pos[0] == side.promotion_row:
            board.crown(move.to_pos)
            result.promoted = True
            logger.debug(f"{side.display_name}棋子在 {move.to_pos} 升王")

        if not move.is_capture:
            return result

        # 3. 移除被吃棋子；格子已空时计数不变
        result.captured_piece = board.remove_piece(move.captured_pos)

        loser = side.opponent
        if board.piece_counts[loser] <= 0:
            result.winner = side
            return result

        # 4. 连跳：刚升王时本回合的吃子序列结束
        if not result.promoted:
            result.next_captures = self.rule_engine.generate_piece_captures(board, move.to_pos)

        return result
