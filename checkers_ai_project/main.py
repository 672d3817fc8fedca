#!/usr/bin/env python3
"""
Checkers AI 主入口文件

提供命令行接口，在终端中与电脑对弈。
"""

import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from checkers_ai_project import __version__, __description__
from checkers_ai_project.src.checkers_engine import (
    CheckersBoard, CheckersGame, ConfigManager, GameConfig, Move, Side, SystemConfig,
    setup_logger_from_config
)

console = Console()

PIECE_STYLES = {
    CheckersBoard.P1_MAN: ("●", "bold red"),
    CheckersBoard.P1_KING: ("♛", "bold red"),
    CheckersBoard.P2_MAN: ("●", "bold white"),
    CheckersBoard.P2_KING: ("♛", "bold white"),
}


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("♛ Checkers AI ♛\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="跳棋对战系统",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    )
    console.print(panel)


def render_board(game: CheckersGame, highlights=()) -> Table:
    """把棋盘渲染为rich表格"""
    table = Table(show_header=True, header_style="yellow", box=None, padding=(0, 1))
    table.add_column(" ")
    for col in range(8):
        table.add_column(chr(ord('a') + col), justify="center")

    snapshot = game.board_snapshot()
    for row in range(8):
        cells = []
        for col in range(8):
            piece = snapshot[row][col]
            dark = (row + col) % 2 == 1
            background = "on dark_cyan" if (row, col) in highlights else ("on blue" if dark else "on grey85")
            if piece in PIECE_STYLES:
                glyph, style = PIECE_STYLES[piece]
                cells.append(Text(glyph, style=f"{style} {background}"))
            else:
                cells.append(Text(" ", style=background))
        table.add_row(Text(str(row), style="yellow"), *cells)
    return table


def show_state(game: CheckersGame, highlights=()):
    console.print(render_board(game, highlights))
    counts = game.piece_counts()
    console.print(f"[red]红方: {counts[Side.PLAYER1]}[/red]  [white]黑方: {counts[Side.PLAYER2]}[/white]")
    console.print(f"[cyan]{game.status_message()}[/cyan]")


def run_computer_turn(game: CheckersGame, config: GameConfig):
    """按配置的节奏让电脑走完一个回合"""
    delay = config.computer_move_delay
    while not game.is_game_over and game.current_side == game.computer_side:
        time.sleep(delay)
        result = game.play_computer_step()
        if result.move is not None:
            console.print(f"[magenta]电脑走棋: {result.move}[/magenta]")
            show_state(game, highlights=(result.move.from_pos, result.move.to_pos))
        delay = config.continuation_delay


@click.group()
@click.version_option(version=__version__, prog_name="Checkers AI")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.option('--config-dir', type=click.Path(), help='配置文件目录')
@click.pass_context
def cli(ctx, debug: bool, config_dir: Optional[str]):
    """跳棋对战系统 - 在终端中与电脑对弈"""
    ctx.ensure_object(dict)

    manager = ConfigManager(config_dir) if config_dir else None
    game_config = manager.get_game_config() if manager else GameConfig()
    system_config = manager.get_system_config() if manager else SystemConfig()

    setup_logger_from_config(system_config, debug=debug)

    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")
    if config_dir:
        console.print(f"[green]使用配置目录: {config_dir}[/green]")

    ctx.obj['game_config'] = game_config


@cli.command()
@click.option('--seed', type=int, default=None, help='电脑随机数种子')
@click.pass_context
def play(ctx, seed: Optional[int]):
    """开始一局人机对弈"""
    config: GameConfig = ctx.obj['game_config']
    if seed is not None:
        config = replace(config, rng_seed=seed)

    # 由命令行控制电脑走棋节奏
    game = CheckersGame(config=replace(config, auto_play_computer=False))
    console.print("[blue]输入走法如 c5d4，m 查看可走步，r 重新开始，q 退出[/blue]")
    run_computer_turn(game, config)
    show_state(game)

    while True:
        if game.is_game_over:
            if not click.confirm("再来一局?", default=False):
                break
            game.new_game()
            run_computer_turn(game, config)
            show_state(game)
            continue

        command = click.prompt("你的走法", default="", show_default=False).strip().lower()
        if command == 'q':
            break
        if command == 'r':
            game.new_game()
            run_computer_turn(game, config)
            show_state(game)
            continue
        if command == 'm':
            moves = game.legal_moves()
            console.print(" ".join(str(move) for move in moves))
            show_state(game, highlights=[move.to_pos for move in moves])
            continue

        try:
            move = Move.from_coordinate_notation(command)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            continue

        result = game.move_piece(move.from_pos, move.to_pos)
        if not result.accepted:
            console.print(f"[red]{result.message}[/red]")
            continue

        show_state(game, highlights=(move.from_pos, move.to_pos))
        run_computer_turn(game, config)

    console.print("[yellow]再见![/yellow]")


@cli.command()
def info():
    """显示系统信息"""
    print_banner()

    rules_text = Text()
    rules_text.append("📜 规则\n", style="bold yellow")
    rules_text.append("• 8x8棋盘，双方各12枚棋子，红方先走\n", style="white")
    rules_text.append("• 有吃必吃，可连续跳吃\n", style="white")
    rules_text.append("• 到达底线升王，升王时本回合跳吃结束\n", style="white")
    rules_text.append("• 吃光对方或使对方无棋可走即获胜", style="white")

    console.print(Panel(rules_text, title="英式跳棋", border_style="yellow"))


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
