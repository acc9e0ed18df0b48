"""
Schemas for ext-harness: mock spec input, capture log, snapshot output.
"""
