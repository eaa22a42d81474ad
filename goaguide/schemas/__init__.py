"""
schemas package — dataclasses shared by the planning modules and the API.
"""
