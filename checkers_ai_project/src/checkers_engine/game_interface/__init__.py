"""
游戏接口模块

包含对局控制、回合状态和电脑对手。
"""

from .opponent import RandomOpponent
from .game_controller import (
    CheckersGame, TurnState, TurnPhase, MoveOutcome, MoveResult,
    SelectionResult, RuleViolation, VIOLATION_MESSAGES
)

__all__ = [
    # 电脑对手
    'RandomOpponent',

    # 对局控制
    'CheckersGame',
    'TurnState',
    'MoveResult',
    'SelectionResult',

    # 枚举类型
    'TurnPhase',
    'MoveOutcome',
    'RuleViolation',
    'VIOLATION_MESSAGES'
]
