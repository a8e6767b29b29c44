"""
Heart-attack history classification from NHIS survey extracts with kernel SVMs.
"""
