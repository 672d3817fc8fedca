"""
跳棋对战系统 (Checkers AI)

英式跳棋的规则引擎、电脑对手和终端对弈界面。
"""

__version__ = "0.1.0"
__author__ = "Checkers AI Team"
__description__ = "跳棋对战系统 - 规则引擎、吃子优先的电脑对手和终端界面"

from checkers_ai_project.src import checkers_engine

__all__ = [
    "checkers_engine",
    "__version__",
    "__author__",
    "__description__",
]
