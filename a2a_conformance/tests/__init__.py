"""
A2A conformance test suite
"""
