"""Infrastructure layer for waconsole"""
