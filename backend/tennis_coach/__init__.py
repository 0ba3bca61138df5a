"""
Tennis Coach API
"""
