"""
Entry Points
============

Console scripts:
    dock_nav_sim    Run docking or the fixed test route against mock hardware
"""
