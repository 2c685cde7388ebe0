import os
import logging

# 日志配置
LOG_LEVEL = os.environ.get("RAYDIUM_PARSER_LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# 槽位合理范围(校验用)
MIN_PLAUSIBLE_SLOT = int(os.environ.get("RAYDIUM_PARSER_MIN_SLOT", "1"))
MAX_PLAUSIBLE_SLOT = int(os.environ.get("RAYDIUM_PARSER_MAX_SLOT", str(10 ** 10)))

# 代币元数据长度限制(字节)
MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_URI_LENGTH = 200


def setup_logging(level: str = None):
    """配置根日志记录器"""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT
    )
