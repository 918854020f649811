"""Core parsing and coverage analysis for the WRGL sequencing pipelines.
"""
