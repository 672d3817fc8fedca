"""
对局控制和游戏接口

管理回合状态、走法验证、连跳限制、胜负判定，以及轮到电脑时调用对手策略。
展示层通过本模块获取合法走法、提交走法并读取棋局状态。
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_config import GameConfig
from ..rules_engine import CheckersBoard, Move, MoveExecutor, RuleEngine, Side, ExecutionResult
from ..rules_engine.board_validator import BoardValidator
from ..utils.exceptions import GameStateError, InvalidMoveError
from .opponent import RandomOpponent


class TurnPhase(Enum):
    """回合阶段枚举"""
    AWAITING_SELECTION = "awaiting_selection"   # 等待走棋方选子
    MULTI_JUMP_PINNED = "multi_jump_pinned"     # 连跳中，锁定同一枚棋子
    GAME_OVER = "game_over"                     # 已结束


class MoveOutcome(Enum):
    """提交走法后的结果"""
    CONTINUE = "continue"       # 同一方继续跳吃
    SWITCHED = "switched"       # 已换手
    GAME_OVER = "game_over"     # 游戏结束
    REJECTED = "rejected"       # 走法被拒绝


class RuleViolation(Enum):
    """走法被拒绝的原因"""
    INVALID_SELECTION = "invalid_selection"
    MANDATORY_CAPTURE_VIOLATION = "mandatory_capture_violation"
    MULTI_JUMP_VIOLATION = "multi_jump_violation"
    GAME_OVER = "game_over"


VIOLATION_MESSAGES = {
    RuleViolation.INVALID_SELECTION: "请选择己方可以移动的棋子和合法的目标格",
    RuleViolation.MANDATORY_CAPTURE_VIOLATION: "存在吃子走法，必须吃子",
    RuleViolation.MULTI_JUMP_VIOLATION: "必须用同一枚棋子继续跳吃",
    RuleViolation.GAME_OVER: "游戏已结束",
}


@dataclass
class TurnState:
    """回合状态"""
    current_side: Side = Side.PLAYER1
    must_capture: bool = False                      # 本回合是否强制吃子
    multi_jump: bool = False                        # 是否处于连跳中
    active_piece: Optional[Tuple[int, int]] = None  # 连跳锁定的棋子位置
    selected: Optional[Tuple[int, int]] = None      # 当前选中的棋子位置
    game_over: bool = False
    winner: Optional[Side] = None

    @property
    def phase(self) -> TurnPhase:
        if self.game_over:
            return TurnPhase.GAME_OVER
        if self.multi_jump:
            return TurnPhase.MULTI_JUMP_PINNED
        return TurnPhase.AWAITING_SELECTION


@dataclass
class MoveResult:
    """走法提交结果"""
    accepted: bool
    outcome: MoveOutcome
    side_to_move: Side
    winner: Optional[Side] = None
    violation: Optional[RuleViolation] = None
    message: str = ""
    move: Optional[Move] = None
    promoted: bool = False
    computer_moves: List[Move] = field(default_factory=list)   # 自动走棋时电脑的应着

    def raise_for_violation(self):
        """被拒绝时抛出InvalidMoveError"""
        if self.violation is not None:
            move_str = self.move.to_coordinate_notation() if self.move else ""
            raise InvalidMoveError(move_str, self.message)


@dataclass
class SelectionResult:
    """选子结果"""
    accepted: bool
    pos: Tuple[int, int]
    moves: List[Move] = field(default_factory=list)
    violation: Optional[RuleViolation] = None
    message: str = ""


class CheckersGame:
    """
    跳棋对局

    持有棋盘和回合状态，是外部调用规则引擎的唯一入口。每个实例是一局独立的对局。
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 opponent: Optional[RandomOpponent] = None,
                 rule_engine: Optional[RuleEngine] = None,
                 start: bool = True):
        """
        初始化对局

        Args:
            config: 对局配置
            opponent: 电脑对手，None时按配置中的种子创建
            rule_engine: 规则引擎
            start: 是否立即开始新对局
        """
        self.logger = logging.getLogger(__name__)

        self.config = config or GameConfig()
        self.human_side = Side(self.config.human_side)
        self.computer_side = Side(self.config.computer_side)
        if self.human_side == self.computer_side:
            raise GameStateError("玩家设置", "人类和电脑不能执同一方")

        self.rule_engine = rule_engine or RuleEngine()
        self.executor = MoveExecutor(self.rule_engine)
        self.opponent = opponent or RandomOpponent(seed=self.config.rng_seed)

        self.board = CheckersBoard()
        self.turn = TurnState()
        self._computer_active = False
        self._computer_moves: List[Move] = []
        self.opening_moves: List[Move] = []

        if start:
            self.new_game()

    @classmethod
    def from_board(cls, board: CheckersBoard, current_side: Side = Side.PLAYER1,
                   config: Optional[GameConfig] = None,
                   opponent: Optional[RandomOpponent] = None) -> 'CheckersGame':
        """
        从指定局面开始对局

        不会自动触发电脑走棋，需要时由调用方调用 play_computer_turn。

        Args:
            board: 棋盘局面
            current_side: 走棋方
            config: 对局配置
            opponent: 电脑对手

        Returns:
            CheckersGame: 对局对象
        """
        is_valid, errors = BoardValidator().full_validation(board)
        if not is_valid:
            raise GameStateError("非法局面", "; ".join(errors))

        game = cls(config=config, opponent=opponent, start=False)
        game.board = board.copy()
        game.turn = TurnState(current_side=Side(current_side))
        game._begin_turn(trigger_computer=False)
        return game

    # ==================== 对局生命周期 ====================

    def new_game(self) -> List[Move]:
        """
        重置棋盘、棋子计数和回合状态，红方先走

        Returns:
            List[Move]: 电脑执红且自动走棋时的开局走法，其余情况为空列表
        """
        self.board.reset_to_initial()
        self.turn = TurnState()
        self._computer_moves = []
        self.logger.info("新对局开始")
        self._begin_turn()

        self.opening_moves = self._computer_moves
        self._computer_moves = []
        return list(self.opening_moves)

    def switch_turn(self):
        """换手，并检查新走棋方是否无棋可走"""
        if self.turn.game_over:
            return

        next_side = self.turn.current_side.opponent
        self.turn = TurnState(current_side=next_side)
        self.logger.debug(f"轮到{next_side.display_name}")
        self._begin_turn()

    def _begin_turn(self, trigger_computer: bool = True):
        """回合开始：判定无子可走，设置强制吃子标志，必要时让电脑走棋"""
        side = self.turn.current_side
        moves = self.rule_engine.generate_legal_moves(self.board, side)
        if not moves:
            self.logger.info(f"{side.display_name}无合法走法")
            self._end_game(side.opponent)
            return

        self.turn.must_capture = any(move.is_capture for move in moves)

        if (trigger_computer and side == self.computer_side and
                self.config.auto_play_computer and not self._computer_active):
            self._computer_moves.extend(self.play_computer_turn())

    def _end_game(self, winner: Side):
        if self.turn.game_over:
            return
        self.turn.game_over = True
        self.turn.winner = winner
        self.turn.multi_jump = False
        self.turn.active_piece = None
        self.turn.selected = None
        self.logger.info(f"游戏结束，{winner.display_name}获胜")

    # ==================== 查询 ====================

    @property
    def current_side(self) -> Side:
        return self.turn.current_side

    @property
    def must_capture(self) -> bool:
        return self.turn.must_capture

    @property
    def is_game_over(self) -> bool:
        return self.turn.game_over

    @property
    def winner(self) -> Optional[Side]:
        return self.turn.winner

    @property
    def phase(self) -> TurnPhase:
        return self.turn.phase

    @property
    def active_piece(self) -> Optional[Tuple[int, int]]:
        return self.turn.active_piece

    @property
    def turn_state(self) -> TurnState:
        """回合状态的副本"""
        return replace(self.turn)

    def board_snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return self.board.snapshot()

    def piece_counts(self) -> Dict[Side, int]:
        return dict(self.board.piece_counts)

    def status_message(self) -> str:
        """当前状态的提示文字"""
        if self.turn.game_over:
            return f"{self.turn.winner.display_name}获胜！游戏结束。"
        if self.turn.multi_jump:
            return "必须继续跳吃！"
        if self.turn.current_side == self.computer_side:
            return "电脑思考中..."
        if self.turn.must_capture:
            return "轮到你了 - 必须吃子！"
        return "轮到你了。"

    def legal_moves(self, side: Optional[Side] = None,
                    pos: Optional[Tuple[int, int]] = None) -> List[Move]:
        """
        获取合法走法

        Args:
            side: 指定一方，None表示当前走棋方
            pos: 指定棋子位置，给出时只返回该棋子的走法

        Returns:
            List[Move]: 已按强制吃子和连跳限制过滤的走法
        """
        if self.turn.game_over:
            return []

        if pos is not None:
            owner = CheckersBoard.owner_of(self.board.get_piece_at(pos))
            if owner is None:
                return []
            return [move for move in self.legal_moves(side=owner) if move.from_pos == tuple(pos)]

        side = self.turn.current_side if side is None else Side(side)
        if side == self.turn.current_side and self.turn.multi_jump:
            return self.rule_engine.generate_piece_captures(self.board, self.turn.active_piece)
        return self.rule_engine.generate_legal_moves(self.board, side)

    # ==================== 选子与走棋 ====================

    def select_piece(self, pos: Tuple[int, int]) -> SelectionResult:
        """
        选中一枚棋子

        Args:
            pos: 棋子位置

        Returns:
            SelectionResult: 选中成功时包含该棋子的合法走法
        """
        pos = tuple(pos)
        violation = None
        moves: List[Move] = []

        if self.turn.game_over:
            violation = RuleViolation.GAME_OVER
        elif not self.board.is_own_piece(pos, self.turn.current_side):
            violation = RuleViolation.INVALID_SELECTION
        elif self.turn.multi_jump and pos != self.turn.active_piece:
            violation = RuleViolation.MULTI_JUMP_VIOLATION
        else:
            moves = self.legal_moves(pos=pos)
            if not moves:
                violation = (RuleViolation.MANDATORY_CAPTURE_VIOLATION if self.turn.must_capture
                             else RuleViolation.INVALID_SELECTION)

        if violation is not None:
            self.logger.debug(f"选子被拒绝: {pos}, 原因: {violation.value}")
            return SelectionResult(accepted=False, pos=pos, violation=violation,
                                   message=VIOLATION_MESSAGES[violation])

        self.turn.selected = pos
        return SelectionResult(accepted=True, pos=pos, moves=moves)

    def deselect(self) -> bool:
        """取消选子，连跳中不能取消"""
        if self.turn.multi_jump:
            return False
        self.turn.selected = None
        return True

    def submit_move(self, move: Move) -> MoveResult:
        """
        提交走法

        走法必须属于当前合法走法集合；被拒绝时状态保持不变。

        Args:
            move: 要执行的走法

        Returns:
            MoveResult: 执行结果
        """
        violation = self._check_move(move)
        if violation is not None:
            self.logger.debug(f"走法被拒绝: {move}, 原因: {violation.value}")
            return self._reject(violation, move)

        self._computer_moves = []
        execution = self._execute(move)
        result = self._build_result(execution)
        result.computer_moves = list(self._computer_moves)
        self._computer_moves = []
        return result

    def move_piece(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> MoveResult:
        """
        按起止坐标走棋

        Args:
            from_pos: 起点
            to_pos: 终点

        Returns:
            MoveResult: 执行结果
        """
        for move in self.legal_moves(pos=from_pos):
            if move.to_pos == tuple(to_pos):
                return self.submit_move(move)

        try:
            candidate = Move.between(from_pos, to_pos)
        except ValueError:
            return self._reject(RuleViolation.INVALID_SELECTION)
        return self.submit_move(candidate)

    def _reject(self, violation: RuleViolation, move: Optional[Move] = None) -> MoveResult:
        return MoveResult(
            accepted=False,
            outcome=MoveOutcome.REJECTED,
            side_to_move=self.turn.current_side,
            winner=self.turn.winner,
            violation=violation,
            message=VIOLATION_MESSAGES[violation],
            move=move
        )

    def _check_move(self, move: Move) -> Optional[RuleViolation]:
        """验证走法，返回违反的规则，合法时返回None"""
        turn = self.turn
        if turn.game_over:
            return RuleViolation.GAME_OVER
        if not self.board.is_own_piece(move.from_pos, turn.current_side):
            return RuleViolation.INVALID_SELECTION
        if turn.multi_jump and (move.from_pos != turn.active_piece or not move.is_capture):
            return RuleViolation.MULTI_JUMP_VIOLATION
        if not move.is_capture and (
                turn.must_capture or self.rule_engine.generate_piece_captures(self.board, move.from_pos)):
            return RuleViolation.MANDATORY_CAPTURE_VIOLATION
        if move not in self.legal_moves():
            return RuleViolation.INVALID_SELECTION
        return None

    def _execute(self, move: Move) -> ExecutionResult:
        """执行已验证的走法并推进回合"""
        side = self.turn.current_side
        execution = self.executor.apply_move(self.board, move)
        self.logger.info(f"{side.display_name}走棋: {move}")

        if execution.game_over:
            self._end_game(execution.winner)
        elif execution.must_continue:
            self.turn.multi_jump = True
            self.turn.must_capture = True
            self.turn.active_piece = move.to_pos
            self.turn.selected = move.to_pos
            self.logger.debug(f"{side.display_name}需继续跳吃: {move.to_pos}")
        else:
            self.switch_turn()

        return execution

    def _build_result(self, execution: ExecutionResult) -> MoveResult:
        turn = self.turn
        if turn.game_over:
            outcome = MoveOutcome.GAME_OVER
        elif turn.multi_jump and turn.current_side == execution.side:
            outcome = MoveOutcome.CONTINUE
        else:
            outcome = MoveOutcome.SWITCHED

        return MoveResult(
            accepted=True,
            outcome=outcome,
            side_to_move=turn.current_side,
            winner=turn.winner,
            message=self.status_message(),
            move=execution.move,
            promoted=execution.promoted
        )

    # ==================== 电脑走棋 ====================

    def play_computer_step(self) -> MoveResult:
        """
        让电脑走一步（连跳中的一跳也算一步）

        对手选出的走法和人类走法一样先经过规则验证，非法时被拒绝且局面不变。

        Returns:
            MoveResult: 执行结果
        """
        if self.turn.game_over:
            raise GameStateError("电脑走棋", "游戏已结束")
        if self.turn.current_side != self.computer_side:
            raise GameStateError("电脑走棋", f"当前轮到{self.turn.current_side.display_name}")

        move = self.opponent.choose_move(self.legal_moves())
        if move is None:
            self._end_game(self.turn.current_side.opponent)
            return MoveResult(accepted=False, outcome=MoveOutcome.GAME_OVER,
                              side_to_move=self.turn.current_side, winner=self.turn.winner,
                              message=self.status_message())

        violation = self._check_move(move)
        if violation is not None:
            self.logger.warning(f"电脑走法被拒绝: {move}, 原因: {violation.value}")
            return self._reject(violation, move)

        return self._build_result(self._execute(move))

    def play_computer_turn(self) -> List[Move]:
        """
        让电脑走完整个回合，包括连跳

        走法被拒绝时停止，仍由电脑一方走棋。

        Returns:
            List[Move]: 电脑依次执行的走法
        """
        moves = []
        self._computer_active = True
        try:
            while not self.turn.game_over and self.turn.current_side == self.computer_side:
                result = self.play_computer_step()
                if result.outcome == MoveOutcome.REJECTED:
                    break
                if result.move is not None:
                    moves.append(result.move)
        finally:
            self._computer_active = False
        return moves
