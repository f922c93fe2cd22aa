"""Pytest configuration for the test suite."""


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large on-disk trees, excluded by run_tests.py")
