import sys
from loguru import logger

def setup_logging(level="INFO", show_time=True, sink=sys.stderr):
    """Configure loguru for turbsa.
    
    Parameters
    ----------
    level : str
        Logging level (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
    show_time : bool
        Whether to show timestamps in the output.
    sink : file-like or str
        Destination of the log records (default: stderr).
    """
    # Drop any handler installed earlier (loguru default or a previous call)
    logger.remove()
    
    log_format = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    if show_time:
        log_format = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " + log_format
        
    logger.add(sink, format=log_format, level=level, colorize=(sink is sys.stderr))
    
    return logger
