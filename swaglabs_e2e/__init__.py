"""
================================================================================
Swag Labs End-to-End Test Suites
================================================================================

Page Object Model UI automation for the Swag Labs demo shop.

    ui_testing/framework   configuration, session lifecycle, page base, reporting
    ui_testing/pages       page objects for the seven screens
    ui_testing/data        immutable datasets and expected-value helpers
    ui_testing/tests       browser test cases
    unit                   browser-free tests for the framework

Author: Automation Team
License: MIT
================================================================================
"""

__version__ = "1.0.0"
