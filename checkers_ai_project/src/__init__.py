"""
Checkers AI 源代码模块

包含子系统：
- checkers_engine: 跳棋规则引擎和电脑对手
"""

from . import checkers_engine

__all__ = [
    "checkers_engine",
]
