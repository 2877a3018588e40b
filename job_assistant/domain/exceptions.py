"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 API 层统一捕获并转换为对调用方安全的错误结果。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STORE_READ_ERROR"）。
        message: 错误信息（仅用于日志，不直接返回给调用方）。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 session_id、catalog 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class InvalidInput(BusinessError):
    """请求格式错误，例如缺少 message 或类型不是文本。"""

    def __init__(self, message: str = "Please provide a valid message", **extra):
        super().__init__(code="INVALID_INPUT", message=message, http_status=400, **extra)


class CatalogUnavailable(BusinessError):
    """职位目录调用失败（网络、超时、服务端错误）。

    由 JobQueryBuilder 在本地恢复为“零结果”，不会中断本轮对话。
    """

    def __init__(self, code: str = "CATALOG_UNAVAILABLE", message: str = "", http_status: int = 503, **extra):
        super().__init__(code=code, message=message, http_status=http_status, **extra)


class StorageFailure(BusinessError):
    """会话持久化失败，本轮对话中止。"""

    def __init__(self, code: str = "STORE_WRITE_ERROR", message: str = "", http_status: int = 500, **extra):
        super().__init__(code=code, message=message, http_status=http_status, **extra)
