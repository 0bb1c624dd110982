"""
pygame presentation for Starry Defense.
"""
