"""
Harness services: matchers, network mock, instrumentation, introspection,
console capture and run orchestration.
"""
