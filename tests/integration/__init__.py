"""
Integration Tests - The analysis pipeline end to end over the sample file.
"""
