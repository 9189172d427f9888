"""Domain layer for waconsole"""
