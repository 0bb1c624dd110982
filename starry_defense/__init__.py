"""
Starry Defense - an arcade missile defense game.
"""
