"""
RelayOps error kinds.

경계 레이어(FastAPI router)는 메시지 텍스트가 아니라 클래스의 status_code / code로
응답 코드를 결정한다. 모든 에러는 현재 요청에 대해 종료(terminal)이며 재시도하지 않는다.
"""

from __future__ import annotations


class RelayOpsError(Exception):
    code: str = "relayops_error"
    status_code: int = 500
    # 운영자가 알아야 하는 실패인지 (True) / 호출자 잘못이라 거절만 하면 되는지 (False)
    operator_visible: bool = True

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class ConfigInvalidError(RelayOpsError):
    code = "config_invalid"
    status_code = 500
    operator_visible = True


class MissingSignatureError(RelayOpsError):
    code = "missing_signature"
    status_code = 400
    operator_visible = False


class VerificationError(RelayOpsError):
    code = "verification_failed"
    status_code = 400
    operator_visible = False


class MalformedPayloadError(RelayOpsError):
    code = "malformed_payload"
    status_code = 400
    operator_visible = False


class DeliveryError(RelayOpsError):
    code = "delivery_failed"
    status_code = 500
    operator_visible = True
