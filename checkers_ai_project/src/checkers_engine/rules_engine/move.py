"""
跳棋走法数据结构

定义跳棋走法的表示和转换功能。
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import re


BOARD_SIZE = 8

_NOTATION_PATTERN = re.compile(r'^([a-h])([0-7])([a-h])([0-7])$')


@dataclass(frozen=True)
class Move:
    """
    跳棋走法类

    表示一个候选走法：起始位置、目标位置、是否吃子以及被吃棋子的位置。
    走法由规则引擎生成后立即交给执行器，不做持久化。
    """
    from_pos: Tuple[int, int]                      # 起始位置 (行, 列)
    to_pos: Tuple[int, int]                        # 目标位置 (行, 列)
    is_capture: bool = False                       # 是否为吃子(跳吃)
    captured_pos: Optional[Tuple[int, int]] = None  # 被跳过的棋子位置

    def __post_init__(self):
        """初始化后统一坐标为整数元组并验证数据有效性"""
        for name in ('from_pos', 'to_pos', 'captured_pos'):
            pos = getattr(self, name)
            if pos is not None:
                object.__setattr__(self, name, (int(pos[0]), int(pos[1])))
        self._validate_positions()

    def _validate_positions(self):
        """验证位置坐标的有效性"""
        positions = [self.from_pos, self.to_pos]
        if self.captured_pos is not None:
            positions.append(self.captured_pos)
        for pos in positions:
            row, col = pos
            if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
                raise ValueError(f"无效的位置坐标: {pos}")
        if self.is_capture and self.captured_pos is None:
            raise ValueError("吃子走法必须指定被吃棋子的位置")

    @property
    def simple(self) -> bool:
        """是否为普通走法"""
        return not self.is_capture

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "a5b4"
        """
        from_col = chr(ord('a') + self.from_pos[1])
        to_col = chr(ord('a') + self.to_pos[1])
        return f"{from_col}{self.from_pos[0]}{to_col}{self.to_pos[0]}"

    @classmethod
    def from_coordinate_notation(cls, notation: str) -> 'Move':
        """
        从坐标记法创建Move对象

        行距为2时视为吃子，被吃位置取两端的中点。

        Args:
            notation: 坐标记法字符串，如 "a5b4"

        Returns:
            Move: Move对象
        """
        match = _NOTATION_PATTERN.match(notation.strip().lower())
        if not match:
            raise ValueError(f"无效的坐标记法: {notation}")

        from_col = ord(match.group(1)) - ord('a')
        from_row = int(match.group(2))
        to_col = ord(match.group(3)) - ord('a')
        to_row = int(match.group(4))

        return cls.between((from_row, from_col), (to_row, to_col))

    @classmethod
    def between(cls, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> 'Move':
        """
        根据起止位置构造走法

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            Move: 行距为2时为吃子走法，否则为普通走法
        """
        if abs(to_pos[0] - from_pos[0]) == 2 and abs(to_pos[1] - from_pos[1]) == 2:
            captured = ((from_pos[0] + to_pos[0]) // 2, (from_pos[1] + to_pos[1]) // 2)
            return cls(from_pos=from_pos, to_pos=to_pos, is_capture=True, captured_pos=captured)
        return cls(from_pos=from_pos, to_pos=to_pos)

    def __str__(self) -> str:
        """字符串表示"""
        sep = 'x' if self.is_capture else '-'
        return f"{self.to_coordinate_notation()[:2]}{sep}{self.to_coordinate_notation()[2:]}"
