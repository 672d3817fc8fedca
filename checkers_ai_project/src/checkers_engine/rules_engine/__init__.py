"""
跳棋规则引擎模块

包含棋盘表示、走法生成、走法执行和棋局验证等核心功能。
"""

from .move import Move, BOARD_SIZE
from .checkers_board import CheckersBoard, Side
from .rule_engine import RuleEngine
from .move_executor import MoveExecutor, ExecutionResult
from .board_validator import BoardValidator

__all__ = [
    'Move', 'BOARD_SIZE', 'CheckersBoard', 'Side', 'RuleEngine',
    'MoveExecutor', 'ExecutionResult', 'BoardValidator'
]
