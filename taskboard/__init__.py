"""Taskboard backend"""
