"""
定期減衰タイマー
"""
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DecayTicker:
    """一定間隔で減衰コールバックを呼ぶタイマー"""

    def __init__(self, interval: float = 60.0, on_tick: Optional[Callable] = None):
        self.interval = interval
        self.on_tick = on_tick
        self.is_running: bool = False
        self.tick_count: int = 0

    async def run(self):
        """停止されるまでinterval秒ごとにon_tickを呼ぶ（page.run_taskから呼び出し）"""
        self.is_running = True
        logger.info("Decay ticker started (every %.0fs)", self.interval)

        while self.is_running:
            await asyncio.sleep(self.interval)
            if not self.is_running:
                break

            self.tick_count += 1
            if not self.on_tick:
                continue
            # 1回の失敗でタイマーを止めない
            try:
                self.on_tick()
            except Exception:
                logger.exception("Decay tick %d failed", self.tick_count)

        logger.info("Decay ticker stopped")

    def stop(self):
        """タイマーを停止"""
        self.is_running = False
