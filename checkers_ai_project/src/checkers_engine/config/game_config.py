"""
游戏配置数据结构

定义各种配置类和默认参数。
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """对局配置"""
    human_side: int = 1                 # 人类玩家 (1: 红方, 2: 黑方)
    computer_side: int = 2              # 电脑玩家
    auto_play_computer: bool = True     # 轮到电脑时是否自动走棋

    # 节奏控制，仅供展示层使用
    computer_move_delay: float = 0.8    # 电脑走棋前的等待时间(秒)
    continuation_delay: float = 0.6     # 连跳时每一跳之间的等待时间(秒)

    # 随机数种子，None表示不固定
    rng_seed: Optional[int] = None


@dataclass
class SystemConfig:
    """系统配置"""
    # 日志配置
    log_level: str = 'INFO'             # 日志级别
    log_file: str = ''                  # 日志文件，空表示不写文件
    log_dir: str = 'logs'               # 日志目录
    log_max_size: int = 10              # 日志文件最大大小(MB)
    log_backup_count: int = 5           # 日志备份数量
    console_output: bool = False        # 是否输出日志到控制台


# 默认配置实例
DEFAULT_GAME_CONFIG = GameConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
