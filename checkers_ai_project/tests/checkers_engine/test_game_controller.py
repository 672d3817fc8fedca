"""
测试CheckersGame对局控制

测试回合流转、强制吃子、连跳锁定、升王、胜负判定和电脑自动走棋。
"""

import random

import pytest
from checkers_ai_project.src.checkers_engine.config import GameConfig
from checkers_ai_project.src.checkers_engine.game_interface import (
    CheckersGame, MoveOutcome, RandomOpponent, RuleViolation, TurnPhase
)
from checkers_ai_project.src.checkers_engine.rules_engine import CheckersBoard, Move, Side
from checkers_ai_project.src.checkers_engine.utils.exceptions import GameStateError, InvalidMoveError


def make_board(pieces):
    board = CheckersBoard.empty()
    for pos, piece in pieces.items():
        board.place_piece(pos, piece)
    return board


# 双方都由调用方手动走棋
MANUAL = GameConfig(auto_play_computer=False)


class TestNewGame:
    """开局和重新开始的测试"""

    def setup_method(self):
        self.game = CheckersGame(config=GameConfig(rng_seed=42))

    def test_initial_state(self):
        assert self.game.current_side == Side.PLAYER1
        assert self.game.phase == TurnPhase.AWAITING_SELECTION
        assert not self.game.must_capture
        assert not self.game.is_game_over
        assert self.game.winner is None
        assert self.game.piece_counts() == {Side.PLAYER1: 12, Side.PLAYER2: 12}
        assert self.game.board_snapshot() == CheckersBoard().snapshot()
        assert len(self.game.legal_moves()) == 7
        assert self.game.status_message() == "轮到你了。"

    def test_human_move_triggers_computer_reply(self):
        """人类走完后电脑自动应着，再次轮到人类"""
        result = self.game.move_piece((5, 2), (4, 3))

        assert result.accepted
        assert result.outcome == MoveOutcome.SWITCHED
        assert result.side_to_move == Side.PLAYER1
        assert len(result.computer_moves) == 1
        assert result.computer_moves[0].from_pos[0] == 2
        assert self.game.current_side == Side.PLAYER1
        assert self.game.piece_counts() == {Side.PLAYER1: 12, Side.PLAYER2: 12}

    def test_restart(self):
        self.game.move_piece((5, 2), (4, 3))
        self.game.new_game()

        assert self.game.board_snapshot() == CheckersBoard().snapshot()
        assert self.game.current_side == Side.PLAYER1
        assert self.game.phase == TurnPhase.AWAITING_SELECTION
        assert self.game.turn_state.selected is None

    def test_computer_opens_when_human_plays_black(self):
        """人类执黑时电脑先走"""
        game = CheckersGame(config=GameConfig(human_side=2, computer_side=1, rng_seed=7))

        assert game.current_side == Side.PLAYER2
        assert game.piece_counts() == {Side.PLAYER1: 12, Side.PLAYER2: 12}
        snapshot = game.board_snapshot()
        assert sum(1 for cell in snapshot[4] if cell == CheckersBoard.P1_MAN) == 1

    def test_new_game_returns_computer_opening(self):
        """电脑执红时开局走法由new_game返回，不混入之后的应着"""
        game = CheckersGame(config=GameConfig(human_side=2, computer_side=1, rng_seed=7))
        assert len(game.opening_moves) == 1

        opening = game.new_game()
        assert len(opening) == 1
        assert opening == game.opening_moves
        assert opening[0].from_pos[0] == 5

        move = game.legal_moves()[0]
        result = game.submit_move(move)
        assert len(result.computer_moves) == 1
        assert opening[0] not in result.computer_moves

        assert self.game.new_game() == []

    def test_same_side_for_both_players(self):
        with pytest.raises(GameStateError):
            CheckersGame(config=GameConfig(human_side=1, computer_side=1))

    def test_games_are_independent(self):
        other = CheckersGame(config=MANUAL)
        other.move_piece((5, 2), (4, 3))
        assert self.game.board_snapshot() == CheckersBoard().snapshot()


class TestSelection:
    """选子的测试"""

    def setup_method(self):
        self.game = CheckersGame(config=MANUAL)

    def test_select_own_piece(self):
        result = self.game.select_piece((5, 2))

        assert result.accepted
        assert {move.to_pos for move in result.moves} == {(4, 1), (4, 3)}
        assert self.game.turn_state.selected == (5, 2)
        assert self.game.deselect()
        assert self.game.turn_state.selected is None

    def test_select_invalid(self):
        for pos in [(4, 1), (2, 1), (6, 1)]:
            result = self.game.select_piece(pos)
            assert not result.accepted
            assert result.violation == RuleViolation.INVALID_SELECTION
            assert result.message

    def test_select_piece_without_capture(self):
        """必须吃子时选择不能吃子的棋子会被拒绝"""
        board = make_board({
            (5, 2): CheckersBoard.P1_MAN,
            (5, 6): CheckersBoard.P1_MAN,
            (4, 1): CheckersBoard.P2_MAN,
        })
        game = CheckersGame.from_board(board, config=MANUAL)

        result = game.select_piece((5, 6))
        assert not result.accepted
        assert result.violation == RuleViolation.MANDATORY_CAPTURE_VIOLATION
        assert game.select_piece((5, 2)).accepted

    def test_legal_moves_for_piece(self):
        moves = self.game.legal_moves(pos=(5, 6))
        assert {move.to_pos for move in moves} == {(4, 5), (4, 7)}
        assert self.game.legal_moves(pos=(4, 4)) == []

        black = self.game.legal_moves(side=Side.PLAYER2)
        assert len(black) == 7


class TestMoveValidation:
    """走法验证的测试"""

    def test_mandatory_capture_violation(self):
        board = make_board({
            (5, 2): CheckersBoard.P1_MAN,
            (5, 6): CheckersBoard.P1_MAN,
            (4, 1): CheckersBoard.P2_MAN,
        })
        game = CheckersGame.from_board(board, config=MANUAL)
        assert game.must_capture
        assert game.status_message() == "轮到你了 - 必须吃子！"

        before = game.board_snapshot()
        result = game.submit_move(Move((5, 6), (4, 5)))

        assert not result.accepted
        assert result.outcome == MoveOutcome.REJECTED
        assert result.violation == RuleViolation.MANDATORY_CAPTURE_VIOLATION
        assert game.board_snapshot() == before
        assert game.current_side == Side.PLAYER1

        with pytest.raises(InvalidMoveError):
            result.raise_for_violation()

    def test_reject_opponent_piece_and_bad_targets(self):
        game = CheckersGame(config=MANUAL)
        before = game.board_snapshot()

        result = game.submit_move(Move((2, 1), (3, 0)))
        assert result.violation == RuleViolation.INVALID_SELECTION

        result = game.move_piece((5, 0), (5, 2))
        assert result.violation == RuleViolation.INVALID_SELECTION

        result = game.move_piece((5, 0), (3, 0))
        assert result.violation == RuleViolation.INVALID_SELECTION

        result = game.move_piece((5, 0), (8, 1))
        assert result.violation == RuleViolation.INVALID_SELECTION

        assert game.board_snapshot() == before
        assert game.current_side == Side.PLAYER1

    def test_move_built_from_lists(self):
        """用列表坐标构造的走法与生成的走法等价"""
        game = CheckersGame(config=MANUAL)
        result = game.submit_move(Move([5, 0], [4, 1]))

        assert result.accepted
        assert game.board_snapshot()[4][1] == CheckersBoard.P1_MAN

    def test_pinned_move_built_from_lists(self):
        board = make_board({
            (6, 1): CheckersBoard.P1_MAN,
            (5, 2): CheckersBoard.P2_MAN,
            (3, 4): CheckersBoard.P2_MAN,
            (0, 5): CheckersBoard.P2_MAN,
        })
        game = CheckersGame.from_board(board, config=MANUAL)
        game.submit_move(Move([6, 1], [4, 3], is_capture=True, captured_pos=[5, 2]))

        result = game.submit_move(Move([4, 3], [2, 5], is_capture=True, captured_pos=[3, 4]))
        assert result.accepted
        assert result.outcome == MoveOutcome.SWITCHED

    def test_accepted_result_has_no_violation(self):
        game = CheckersGame(config=MANUAL)
        result = game.move_piece((5, 0), (4, 1))

        assert result.accepted
        result.raise_for_violation()
        assert result.side_to_move == Side.PLAYER2


class TestMultiJump:
    """连跳的测试"""

    def setup_method(self):
        board = make_board({
            (6, 1): CheckersBoard.P1_MAN,
            (5, 2): CheckersBoard.P2_MAN,
            (3, 4): CheckersBoard.P2_MAN,
            (6, 7): CheckersBoard.P1_MAN,
            (0, 5): CheckersBoard.P2_MAN,
        })
        self.game = CheckersGame.from_board(board, config=MANUAL)

    def test_first_jump_pins_piece(self):
        result = self.game.move_piece((6, 1), (4, 3))

        assert result.accepted
        assert result.outcome == MoveOutcome.CONTINUE
        assert result.side_to_move == Side.PLAYER1
        assert self.game.phase == TurnPhase.MULTI_JUMP_PINNED
        assert self.game.active_piece == (4, 3)
        assert self.game.legal_moves() == [
            Move((4, 3), (2, 5), is_capture=True, captured_pos=(3, 4))
        ]
        assert self.game.status_message() == "必须继续跳吃！"

    def test_other_piece_rejected_while_pinned(self):
        self.game.move_piece((6, 1), (4, 3))

        result = self.game.move_piece((6, 7), (5, 6))
        assert result.violation == RuleViolation.MULTI_JUMP_VIOLATION

        selection = self.game.select_piece((6, 7))
        assert selection.violation == RuleViolation.MULTI_JUMP_VIOLATION

        assert not self.game.deselect()
        assert self.game.select_piece((4, 3)).accepted

    def test_pinned_piece_must_capture(self):
        self.game.move_piece((6, 1), (4, 3))

        result = self.game.move_piece((4, 3), (3, 2))
        assert result.violation == RuleViolation.MULTI_JUMP_VIOLATION
        assert self.game.active_piece == (4, 3)

    def test_chain_completes(self):
        self.game.move_piece((6, 1), (4, 3))
        result = self.game.move_piece((4, 3), (2, 5))

        assert result.accepted
        assert result.outcome == MoveOutcome.SWITCHED
        assert result.side_to_move == Side.PLAYER2
        assert self.game.phase == TurnPhase.AWAITING_SELECTION
        assert self.game.active_piece is None
        assert self.game.piece_counts() == {Side.PLAYER1: 2, Side.PLAYER2: 1}

    def test_promotion_ends_turn(self):
        """升王的一跳结束连跳，换对方走棋"""
        board = make_board({
            (2, 1): CheckersBoard.P1_MAN,
            (1, 2): CheckersBoard.P2_MAN,
            (1, 4): CheckersBoard.P2_MAN,
        })
        game = CheckersGame.from_board(board, config=MANUAL)
        result = game.move_piece((2, 1), (0, 3))

        assert result.promoted
        assert result.outcome == MoveOutcome.SWITCHED
        assert game.current_side == Side.PLAYER2
        assert game.board_snapshot()[0][3] == CheckersBoard.P1_KING
        assert not game.must_capture


class TestGameOver:
    """胜负判定的测试"""

    def test_capture_last_piece(self):
        board = make_board({(4, 1): CheckersBoard.P2_MAN, (5, 0): CheckersBoard.P1_MAN})
        game = CheckersGame.from_board(board)

        result = game.move_piece((5, 0), (3, 2))
        assert result.outcome == MoveOutcome.GAME_OVER
        assert result.winner == Side.PLAYER1
        assert game.is_game_over
        assert game.phase == TurnPhase.GAME_OVER
        assert game.status_message() == "红方获胜！游戏结束。"

        assert game.legal_moves() == []
        assert game.submit_move(Move((3, 2), (2, 1))).violation == RuleViolation.GAME_OVER
        assert game.select_piece((3, 2)).violation == RuleViolation.GAME_OVER

    def test_opponent_without_moves_loses(self):
        """对方轮到时无棋可走即告负"""
        board = make_board({
            (0, 1): CheckersBoard.P2_MAN,
            (1, 0): CheckersBoard.P1_MAN,
            (1, 2): CheckersBoard.P1_MAN,
            (2, 3): CheckersBoard.P1_MAN,
            (5, 6): CheckersBoard.P1_MAN,
        })
        game = CheckersGame.from_board(board)
        result = game.move_piece((5, 6), (4, 5))

        assert result.outcome == MoveOutcome.GAME_OVER
        assert result.winner == Side.PLAYER1
        assert game.piece_counts()[Side.PLAYER2] == 1

    def test_start_without_moves(self):
        board = make_board({
            (0, 1): CheckersBoard.P2_MAN,
            (1, 0): CheckersBoard.P1_MAN,
            (1, 2): CheckersBoard.P1_MAN,
            (2, 3): CheckersBoard.P1_MAN,
        })
        game = CheckersGame.from_board(board, current_side=Side.PLAYER2)

        assert game.is_game_over
        assert game.winner == Side.PLAYER1

    def test_invalid_board_rejected(self):
        board = make_board({(4, 4): CheckersBoard.P1_MAN})
        with pytest.raises(GameStateError):
            CheckersGame.from_board(board)


class TestRandomPlayouts:
    """随机对局中规则不变量始终成立"""

    def test_invariants_hold(self):
        for seed in range(5):
            game = CheckersGame(config=MANUAL)
            rng = random.Random(seed)

            for _ in range(300):
                if game.is_game_over:
                    break

                moves = game.legal_moves()
                captures = [move for move in moves if move.is_capture]
                assert not captures or len(captures) == len(moves)

                side = game.current_side
                before = game.piece_counts()
                move = rng.choice(moves)
                result = game.submit_move(move)
                after = game.piece_counts()

                assert result.accepted
                if move.is_capture:
                    assert after[side.opponent] == before[side.opponent] - 1
                    assert after[side] == before[side]
                    row, col = move.captured_pos
                    assert game.board_snapshot()[row][col] == CheckersBoard.EMPTY
                else:
                    assert after == before

                if result.outcome == MoveOutcome.CONTINUE:
                    assert all(m.from_pos == move.to_pos and m.is_capture
                               for m in game.legal_moves())

                is_valid, errors = game.board.validate_board_state()
                assert is_valid, errors

            if game.is_game_over:
                loser = game.winner.opponent
                assert (game.piece_counts()[loser] == 0 or
                        game.rule_engine.generate_legal_moves(game.board, loser) == [])


class TestComputerPlay:
    """电脑走棋的测试"""

    def test_computer_double_jump(self):
        """电脑连跳时一个回合走两步"""
        board = make_board({
            (1, 2): CheckersBoard.P2_MAN,
            (2, 3): CheckersBoard.P1_MAN,
            (4, 5): CheckersBoard.P1_MAN,
            (7, 0): CheckersBoard.P1_MAN,
        })
        game = CheckersGame.from_board(board, current_side=Side.PLAYER2)
        assert game.status_message() == "电脑思考中..."

        moves = game.play_computer_turn()

        assert moves == [
            Move((1, 2), (3, 4), is_capture=True, captured_pos=(2, 3)),
            Move((3, 4), (5, 6), is_capture=True, captured_pos=(4, 5)),
        ]
        assert game.current_side == Side.PLAYER1
        assert game.piece_counts() == {Side.PLAYER1: 1, Side.PLAYER2: 1}

    def test_computer_step_by_step(self):
        board = make_board({
            (1, 2): CheckersBoard.P2_MAN,
            (2, 3): CheckersBoard.P1_MAN,
            (4, 5): CheckersBoard.P1_MAN,
            (7, 0): CheckersBoard.P1_MAN,
        })
        game = CheckersGame.from_board(board, current_side=Side.PLAYER2)

        first = game.play_computer_step()
        assert first.outcome == MoveOutcome.CONTINUE
        assert game.active_piece == (3, 4)

        second = game.play_computer_step()
        assert second.outcome == MoveOutcome.SWITCHED
        assert second.side_to_move == Side.PLAYER1

    def test_illegal_computer_move_rejected(self):
        """对手给出的非法走法和人类走法一样被拒绝"""

        class StubbornOpponent(RandomOpponent):
            def choose_move(self, legal_moves):
                return Move((1, 0), (2, 1))

        board = make_board({
            (1, 0): CheckersBoard.P2_MAN,
            (1, 2): CheckersBoard.P2_MAN,
            (2, 3): CheckersBoard.P1_MAN,
            (7, 0): CheckersBoard.P1_MAN,
        })
        game = CheckersGame.from_board(board, current_side=Side.PLAYER2, opponent=StubbornOpponent())
        assert game.must_capture
        before = game.board_snapshot()

        result = game.play_computer_step()
        assert not result.accepted
        assert result.outcome == MoveOutcome.REJECTED
        assert result.violation == RuleViolation.MANDATORY_CAPTURE_VIOLATION
        assert game.board_snapshot() == before
        assert game.current_side == Side.PLAYER2

        assert game.play_computer_turn() == []
        assert game.board_snapshot() == before

    def test_computer_step_on_human_turn(self):
        game = CheckersGame(config=MANUAL)
        with pytest.raises(GameStateError):
            game.play_computer_step()

    def test_seeded_games_repeat(self):
        """相同种子的对局走出相同的应着"""
        first = CheckersGame(config=GameConfig(rng_seed=3))
        second = CheckersGame(config=GameConfig(rng_seed=3))

        for _ in range(3):
            moves = first.legal_moves()
            if first.is_game_over:
                break
            move = moves[0]
            a = first.submit_move(move)
            b = second.submit_move(move)
            assert a.computer_moves == b.computer_moves
            assert first.board_snapshot() == second.board_snapshot()

    def test_injected_opponent(self):
        opponent = RandomOpponent(rng=random.Random(11))
        game = CheckersGame(opponent=opponent)
        game.move_piece((5, 0), (4, 1))

        assert game.opponent is opponent
        assert opponent.move_count >= 1
