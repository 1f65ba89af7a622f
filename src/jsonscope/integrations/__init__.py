"""Integrations with external tooling.

- ``_pytest_plugin``: pytest11 plugin providing the
  ``assert_no_duplicate_strings`` fixture.  Auto-discovered by pytest once
  jsonscope is installed.
"""
