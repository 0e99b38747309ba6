"""
Web interface for the CPU Scheduling Simulator
"""
