"""
================================================================================
Swag Labs Automation Tools
================================================================================

Supporting utilities shared by the Swag Labs test suites.

Modules:
    - common: Loguru logging setup and filesystem helpers
    - report_tools: Allure attachment helpers and report processing

Example:
    from swaglabs_tools.common import init_logger
    from swaglabs_tools.report_tools.allure_utils import attach_png

    init_logger(level="DEBUG")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
