"""
Personalized menu service: segment menus with promotions and dynamic pricing.
"""
