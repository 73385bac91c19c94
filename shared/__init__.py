"""Shared utilities (logging, configuration) for the compiler and CLI"""
