"""비밀번호 검증 모듈."""

from __future__ import annotations

import asyncio
from functools import partial

from passlib.context import CryptContext


class PasswordHasher:
    """bcrypt 비밀번호 해싱 및 검증을 담당하는 클래스.

    기존 사용자 테이블의 `$2y$` 해시도 검증할 수 있다.
    """

    def __init__(self) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=12,
        )

    def hash(self, password: str) -> str:
        """비밀번호를 bcrypt로 해싱한다."""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """평문 비밀번호와 해시를 비교 검증한다.

        해시가 비어 있거나 알 수 없는 형식이면 False를 반환한다.
        """
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    async def verify_async(self, plain_password: str, hashed_password: str) -> bool:
        """
        평문 비밀번호와 해시를 비교 검증한다 (비동기).

        bcrypt 검증은 CPU 집약적이므로 별도 스레드에서 실행해 이벤트 루프를 막지 않는다.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, partial(self.verify, plain_password, hashed_password)
        )


password_hasher = PasswordHasher()
