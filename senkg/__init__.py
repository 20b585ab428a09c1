"""
SEN knowledge-graph rule inference.
"""
