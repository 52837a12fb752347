"""
Relay flows: request -> prompt -> completion -> response shaping.
"""
