"""Application layer for waconsole"""
