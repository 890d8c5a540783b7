"""
Tests for the advection-diffusion discretization.

Run tests with pytest:
    pytest advdiff/tests/ -v

Or run individual test files:
    pytest advdiff/tests/test_jacobian.py -v
"""
