"""Standalone functions deployed next to the main API"""
