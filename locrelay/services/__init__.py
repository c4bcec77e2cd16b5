"""
Services layer - Business logic goes here.

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Nothing submitted by a browser is stored; reports are relayed and dropped
"""
