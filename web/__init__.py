"""
web - HTTP API движка Peg33 (Flask).
"""
