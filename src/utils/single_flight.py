"""키별 진행 중 작업 공유 (같은 레코드에 대한 동시 요청 중복 실행 방지)"""
from typing import Any, Awaitable, Callable, Dict, Hashable
import asyncio
import logging

logger = logging.getLogger(__name__)


class SingleFlight:
    """키별 진행 중 작업 공유

    진행 중인 작업이 있으면 새로 실행하지 않고 같은 결과를 기다리며,
    작업이 끝난 뒤 들어온 요청은 다시 실행합니다.
    프로세스 단위 보호입니다 (여러 워커 간에는 공유되지 않음).
    """

    def __init__(self):
        self._inflight: Dict[Hashable, asyncio.Task] = {}

    def is_running(self, key: Hashable) -> bool:
        task = self._inflight.get(key)
        return task is not None and not task.done()

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> Any:
        task = self._inflight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(factory())
            self._inflight[key] = task
            task.add_done_callback(lambda t, k=key: self._release(k, t))
        else:
            logger.info(f"[SingleFlight] 진행 중인 작업 공유: {key}")
        # 한 호출자가 취소돼도 공유 작업은 계속 진행
        return await asyncio.shield(task)

    def _release(self, key: Hashable, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
