#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
台股價格追蹤器 - 主程式進入點
"""

import sys
import os

# 添加 src 到 Python 路徑
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from twstock_tracker.cli import main

if __name__ == "__main__":
    sys.exit(main())
