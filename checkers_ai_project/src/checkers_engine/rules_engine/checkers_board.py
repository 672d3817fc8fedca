"""
跳棋棋盘数据结构

定义8x8跳棋棋盘的表示、查询和格式转换功能。
"""

import copy
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .move import BOARD_SIZE


class Side(IntEnum):
    """对弈双方"""
    PLAYER1 = 1   # 红方，向行号减小的方向前进
    PLAYER2 = 2   # 黑方，向行号增大的方向前进

    @property
    def opponent(self) -> 'Side':
        """对手一方"""
        return Side.PLAYER2 if self is Side.PLAYER1 else Side.PLAYER1

    @property
    def forward(self) -> int:
        """兵前进方向的行增量"""
        return -1 if self is Side.PLAYER1 else 1

    @property
    def promotion_row(self) -> int:
        """升王所在的底线行"""
        return 0 if self is Side.PLAYER1 else BOARD_SIZE - 1

    @property
    def display_name(self) -> str:
        return "红方" if self is Side.PLAYER1 else "黑方"


class CheckersBoard:
    """
    跳棋棋盘类

    维护格子内容和双方剩余棋子数。棋子只能出现在 (行+列) 为奇数的深色格上。
    """

    # 格子内容常量
    EMPTY = 0
    P1_MAN = 1
    P2_MAN = 2
    P1_KING = 3
    P2_KING = 4

    # 每方初始棋子数
    PIECES_PER_SIDE = 12

    # 文本显示符号
    PIECE_SYMBOLS = {
        0: ".", 1: "r", 2: "b", 3: "R", 4: "B"
    }

    MAN_OF = {Side.PLAYER1: P1_MAN, Side.PLAYER2: P2_MAN}
    KING_OF = {Side.PLAYER1: P1_KING, Side.PLAYER2: P2_KING}

    def __init__(self):
        """初始化为开局局面"""
        self.board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=int)
        self.piece_counts: Dict[Side, int] = {Side.PLAYER1: 0, Side.PLAYER2: 0}
        self._setup_initial_position()

    def _setup_initial_position(self):
        """设置开局：黑方占上三行的深色格，红方占下三行的深色格"""
        self.board.fill(self.EMPTY)
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if not self.is_playable((row, col)):
                    continue
                if row < 3:
                    self.board[row, col] = self.P2_MAN
                elif row > 4:
                    self.board[row, col] = self.P1_MAN
        self.piece_counts = {
            Side.PLAYER1: self.PIECES_PER_SIDE,
            Side.PLAYER2: self.PIECES_PER_SIDE
        }

    @classmethod
    def empty(cls) -> 'CheckersBoard':
        """创建空棋盘"""
        board = cls()
        board.board.fill(cls.EMPTY)
        board.piece_counts = {Side.PLAYER1: 0, Side.PLAYER2: 0}
        return board

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'CheckersBoard':
        """
        从矩阵创建棋盘对象，棋子数按矩阵内容统计

        Args:
            matrix: 8x8的棋盘矩阵

        Returns:
            CheckersBoard: 棋盘对象
        """
        board = cls()
        board.board = np.array(matrix, dtype=int).copy()
        board.piece_counts = {
            Side.PLAYER1: board.count_pieces(Side.PLAYER1),
            Side.PLAYER2: board.count_pieces(Side.PLAYER2)
        }
        return board

    def to_matrix(self) -> np.ndarray:
        """
        转换为矩阵格式

        Returns:
            np.ndarray: 8x8的棋盘矩阵副本
        """
        return self.board.copy()

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """只读的棋盘快照，供展示层渲染"""
        return tuple(tuple(int(cell) for cell in row) for row in self.board)

    # ==================== 查询 ====================

    @staticmethod
    def is_valid_position(pos: Tuple[int, int]) -> bool:
        """检查坐标是否在棋盘范围内"""
        row, col = pos
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    @staticmethod
    def is_playable(pos: Tuple[int, int]) -> bool:
        """检查是否为可放置棋子的深色格"""
        row, col = pos
        return (row + col) % 2 == 1

    @classmethod
    def owner_of(cls, piece: int) -> Optional[Side]:
        """返回棋子所属一方，空格返回None"""
        if piece in (cls.P1_MAN, cls.P1_KING):
            return Side.PLAYER1
        if piece in (cls.P2_MAN, cls.P2_KING):
            return Side.PLAYER2
        return None

    @classmethod
    def is_king(cls, piece: int) -> bool:
        return piece in (cls.P1_KING, cls.P2_KING)

    def get_piece_at(self, pos: Tuple[int, int]) -> int:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (行, 列)

        Returns:
            int: 格子内容，越界时返回EMPTY
        """
        if self.is_valid_position(pos):
            return int(self.board[pos[0], pos[1]])
        return self.EMPTY

    def is_empty(self, pos: Tuple[int, int]) -> bool:
        return self.get_piece_at(pos) == self.EMPTY

    def is_own_piece(self, pos: Tuple[int, int], side: Side) -> bool:
        """检查指定位置是否为己方棋子"""
        return self.owner_of(self.get_piece_at(pos)) == side

    def is_enemy_piece(self, pos: Tuple[int, int], side: Side) -> bool:
        """检查指定位置是否为敌方棋子"""
        owner = self.owner_of(self.get_piece_at(pos))
        return owner is not None and owner != side

    def get_all_pieces(self, side: Optional[Side] = None) -> List[Tuple[Tuple[int, int], int]]:
        """
        获取所有棋子的位置和类型，按行列顺序

        Args:
            side: 指定一方，None表示全部

        Returns:
            List[Tuple[Tuple[int, int], int]]: [(位置, 棋子类型), ...]
        """
        pieces = []
        for row, col in zip(*np.nonzero(self.board)):
            piece = int(self.board[row, col])
            if side is None or self.owner_of(piece) == side:
                pieces.append(((int(row), int(col)), piece))
        return pieces

    def count_pieces(self, side: Side) -> int:
        """按格子内容统计某方棋子数"""
        return int(np.isin(self.board, (self.MAN_OF[side], self.KING_OF[side])).sum())

    # ==================== 修改 (仅供走法执行器使用) ====================

    def place_piece(self, pos: Tuple[int, int], piece: int):
        """在指定位置放置棋子并更新计数"""
        previous = self.owner_of(self.get_piece_at(pos))
        if previous is not None:
            self.piece_counts[previous] -= 1
        self.board[pos[0], pos[1]] = piece
        owner = self.owner_of(piece)
        if owner is not None:
            self.piece_counts[owner] += 1

    def relocate(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> int:
        """把棋子从起点移到终点，返回被移动的棋子"""
        piece = int(self.board[from_pos[0], from_pos[1]])
        self.board[to_pos[0], to_pos[1]] = piece
        self.board[from_pos[0], from_pos[1]] = self.EMPTY
        return piece

    def remove_piece(self, pos: Tuple[int, int]) -> int:
        """
        移除指定位置的棋子

        格子已空时不做任何修改。

        Returns:
            int: 被移除的棋子，空格返回EMPTY
        """
        piece = self.get_piece_at(pos)
        owner = self.owner_of(piece)
        if owner is not None:
            self.board[pos[0], pos[1]] = self.EMPTY
            self.piece_counts[owner] -= 1
        return piece

    def crown(self, pos: Tuple[int, int]):
        """把指定位置的兵升为王"""
        owner = self.owner_of(self.get_piece_at(pos))
        if owner is not None:
            self.board[pos[0], pos[1]] = self.KING_OF[owner]

    # ==================== 棋局验证功能 ====================

    def validate_board_state(self) -> Tuple[bool, List[str]]:
        """
        验证棋局状态的合法性

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        from .board_validator import BoardValidator
        return BoardValidator().full_validation(self)

    # ==================== 实用工具方法 ====================

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 可视化的棋盘字符串
        """
        lines = ["   a b c d e f g h"]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                piece = int(self.board[row, col])
                if piece == self.EMPTY and not self.is_playable((row, col)):
                    cells.append(" ")
                else:
                    cells.append(self.PIECE_SYMBOLS[piece])
            lines.append(f"{row}  " + " ".join(cells))
        lines.append(f"红方: {self.piece_counts[Side.PLAYER1]}  黑方: {self.piece_counts[Side.PLAYER2]}")
        return "\n".join(lines)

    def copy(self) -> 'CheckersBoard':
        """创建棋盘的深拷贝"""
        return copy.deepcopy(self)

    def reset_to_initial(self):
        """重置到开局局面"""
        self._setup_initial_position()

    def __str__(self) -> str:
        return self.to_visual_string()

    def __eq__(self, other) -> bool:
        if not isinstance(other, CheckersBoard):
            return False
        return np.array_equal(self.board, other.board)

    __hash__ = None
