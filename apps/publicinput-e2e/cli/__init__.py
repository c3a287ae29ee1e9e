"""
@PURPOSE: Command-line interface for the PublicInput end-to-end suite
"""
