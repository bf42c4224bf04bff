"""Text reports and their on-disk rotation"""

from .text_report import format_signal, format_cdma_report, format_link_report
from .storage import ResultStore, CDMA_PREFIX, LINK_PREFIX, MAX_FILES_TO_KEEP

__all__ = [
    'format_signal',
    'format_cdma_report',
    'format_link_report',
    'ResultStore',
    'CDMA_PREFIX',
    'LINK_PREFIX',
    'MAX_FILES_TO_KEEP'
]
