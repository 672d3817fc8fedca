"""
日志系统

提供统一的日志记录功能，可直接按系统配置初始化。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..config.game_config import SystemConfig

ROOT_LOGGER_NAME = 'checkers_ai_project'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _file_handler(log_dir: str, log_file: str, max_size: int, backup_count: int) -> logging.Handler:
    """按大小轮转的文件处理器，max_size单位为MB"""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        filename=log_path / log_file,
        maxBytes=max_size * 1024 * 1024,
        backupCount=backup_count,
        encoding='utf-8'
    )


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/checkers_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    已经配置过处理器的记录器原样返回。

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_file: 日志文件名，为空时不写文件
        log_dir: 日志目录
        max_size: 日志文件最大大小(MB)
        backup_count: 备份文件数量
        console_output: 是否输出到控制台

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    handlers = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        handlers.append(_file_handler(log_dir, log_file, max_size, backup_count))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def setup_logger_from_config(config: 'SystemConfig', debug: bool = False,
                             name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    按系统配置设置日志记录器

    调试模式下日志级别为DEBUG，并强制输出到控制台。

    Args:
        config: 系统配置
        debug: 是否为调试模式
        name: 日志记录器名称

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    return setup_logger(
        name=name,
        level='DEBUG' if debug else config.log_level,
        log_file=config.log_file or None,
        log_dir=config.log_dir,
        max_size=config.log_max_size,
        backup_count=config.log_backup_count,
        console_output=debug or config.console_output
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取日志记录器"""
    return logging.getLogger(name)


class LoggerMixin:
    """
    日志记录器混入类

    为类提供 checkers_ai_project.<类名> 形式的日志记录器。
    """

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER_NAME}.{self.__class__.__name__}')

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)
