"""
跳棋规则引擎

实现单个棋子和整方的走法生成，并执行强制吃子规则。
"""

from typing import List, Optional, Tuple

from .checkers_board import CheckersBoard, Side
from .move import Move


class RuleEngine:
    """
    跳棋规则引擎

    负责生成合法走法、判断是否存在吃子以及验证走法合法性。
    """

    def __init__(self):
        """初始化规则引擎"""
        # 斜向移动方向，按前进方向划分
        self.up_moves = [(-1, -1), (-1, 1)]    # 红方兵前进方向
        self.down_moves = [(1, -1), (1, 1)]    # 黑方兵前进方向

    def get_directions(self, piece: int) -> List[Tuple[int, int]]:
        """
        获取棋子可移动的方向

        兵只能沿己方前进方向的两条斜线移动，王可以沿四条斜线移动。

        Args:
            piece: 棋子类型

        Returns:
            List[Tuple[int, int]]: 方向列表
        """
        owner = CheckersBoard.owner_of(piece)
        if owner is None:
            return []

        directions = []
        if owner == Side.PLAYER1 or CheckersBoard.is_king(piece):
            directions.extend(self.up_moves)
        if owner == Side.PLAYER2 or CheckersBoard.is_king(piece):
            directions.extend(self.down_moves)
        return directions

    def generate_piece_moves(self, board: CheckersBoard, pos: Tuple[int, int]) -> List[Move]:
        """
        生成指定位置棋子的所有走法

        只要该棋子存在吃子走法，就只返回吃子走法；这一规则只看该棋子本身。

        Args:
            board: 当前棋盘状态
            pos: 棋子位置

        Returns:
            List[Move]: 走法列表，空格返回空列表
        """
        piece = board.get_piece_at(pos)
        owner = CheckersBoard.owner_of(piece)
        if owner is None:
            return []

        row, col = pos
        simple_moves = []
        captures = []

        for dr, dc in self.get_directions(piece):
            step = (row + dr, col + dc)
            if not board.is_valid_position(step):
                continue

            if board.is_empty(step):
                simple_moves.append(Move(from_pos=pos, to_pos=step))
            elif board.is_enemy_piece(step, owner):
                landing = (row + 2 * dr, col + 2 * dc)
                if board.is_valid_position(landing) and board.is_empty(landing):
                    captures.append(Move(
                        from_pos=pos,
                        to_pos=landing,
                        is_capture=True,
                        captured_pos=step
                    ))

        return captures if captures else simple_moves

    def generate_piece_captures(self, board: CheckersBoard, pos: Tuple[int, int]) -> List[Move]:
        """只生成指定棋子的吃子走法"""
        return [move for move in self.generate_piece_moves(board, pos) if move.is_capture]

    def has_capture(self, board: CheckersBoard, side: Side) -> bool:
        """
        检查某方是否存在任意吃子走法

        Args:
            board: 棋盘状态
            side: 一方

        Returns:
            bool: 是否存在吃子
        """
        for pos, _ in board.get_all_pieces(side):
            if self.generate_piece_captures(board, pos):
                return True
        return False

    def generate_legal_moves(self, board: CheckersBoard, side: Side) -> List[Move]:
        """
        生成指定一方的所有合法走法

        只要有任意棋子可以吃子，结果中只包含吃子走法；否则为各棋子普通走法的并集。

        Args:
            board: 当前棋盘状态
            side: 一方

        Returns:
            List[Move]: 合法走法列表，每个走法都带有起始位置
        """
        must_capture = self.has_capture(board, side)

        legal_moves = []
        for pos, _ in board.get_all_pieces(side):
            piece_moves = self.generate_piece_moves(board, pos)
            if must_capture:
                piece_moves = [move for move in piece_moves if move.is_capture]
            legal_moves.extend(piece_moves)

        return legal_moves

    def is_legal_move(self, board: CheckersBoard, move: Move, side: Optional[Side] = None) -> bool:
        """
        检查走法是否合法

        Args:
            board: 棋盘状态
            move: 要检查的走法
            side: 走棋方，None表示按起点棋子判断

        Returns:
            bool: 走法是否合法
        """
        owner = CheckersBoard.owner_of(board.get_piece_at(move.from_pos))
        if owner is None or (side is not None and owner != side):
            return False
        return move in self.generate_legal_moves(board, owner)
