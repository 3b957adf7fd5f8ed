"""
numlab

Класичні чисельні методи над текстовими функціями від x:
корені рівнянь, ітераційні методи для лінійних систем, інтерполяція,
диференціювання та інтегрування.

    numlab.core - обчислювальне ядро (без залежності від Qt)
    numlab.ui   - віджети PyQt6
    numlab.app  - контролер та точка входу GUI
"""

__version__ = "1.0.0"
