#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
速率限制器 - 滑動視窗閘門，控制對代理服務器的請求頻率
"""

import logging
import time
from collections import deque
from typing import Callable, Optional
import threading

from ..exceptions import OperationCancelledError

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    滑動視窗速率限制器

    max_requests=1 時即為固定間隔閘門：連續兩次請求的開始時間至少相隔 window_seconds，
    第一次請求不需等待。
    """

    def __init__(self, max_requests: int = 1, window_seconds: float = 1.0,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if max_requests < 1:
            raise ValueError(f"max_requests 必須 >= 1: {max_requests}")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.sleep = sleep
        self.hits = deque()

    def acquire(self, cancel_event: Optional[threading.Event] = None) -> float:
        """獲取請求許可，如需要會自動等待；回傳實際等待秒數"""
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError()

        now = self.clock()

        # 移除窗口外的舊請求
        while self.hits and now - self.hits[0] >= self.window_seconds:
            self.hits.popleft()

        # 如果達到限制，等待到最舊請求過期
        sleep_time = 0.0
        if len(self.hits) >= self.max_requests:
            sleep_time = self.window_seconds - (now - self.hits[0])
            logger.debug(f"速率限制: 等待 {sleep_time:.2f} 秒")
            self._wait(sleep_time, cancel_event)
            self.hits.popleft()

        # 記錄新請求
        self.hits.append(self.clock())
        return sleep_time

    def _wait(self, seconds: float, cancel_event: Optional[threading.Event]):
        self.sleep(seconds)
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError()

    def reset(self):
        """清除請求記錄"""
        self.hits.clear()
