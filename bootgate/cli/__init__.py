"""
bootgate.cli

Command modules stay import-light: heavy imports happen inside _run().
"""
