"""
电脑对手策略

在合法走法中优先吃子，其余情况随机选择。不评估局面，也不向前搜索。
"""

import random
from typing import List, Optional, Sequence

from ..rules_engine import Move
from ..utils.logger import LoggerMixin


class RandomOpponent(LoggerMixin):
    """
    吃子优先的随机对手

    随机数源由外部注入，便于在测试中固定选择结果。
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        初始化对手

        Args:
            rng: 随机数生成器，优先使用
            seed: 未提供rng时用于创建生成器的种子
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.move_count = 0

    def choose_move(self, legal_moves: Sequence[Move]) -> Optional[Move]:
        """
        从合法走法中选择一步

        存在吃子走法时在吃子走法中等概率选择，否则在普通走法中等概率选择。

        Args:
            legal_moves: 当前一方的合法走法，已按强制吃子和连跳限制过滤

        Returns:
            Optional[Move]: 选中的走法，没有合法走法时返回None
        """
        if not legal_moves:
            return None

        captures: List[Move] = [move for move in legal_moves if move.is_capture]
        candidates = captures if captures else list(legal_moves)

        chosen = self.rng.choice(candidates)
        self.move_count += 1
        self.log_debug(f"电脑从 {len(candidates)} 个候选中选择: {chosen}")
        return chosen
