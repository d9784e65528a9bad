"""taskwire 异常体系

所有 codec / 解析错误都以类型化异常返回给调用方，不做静默替换。
是否跳过记录、提示用户或以非零码退出 hook，由调用方决定。
"""


class TaskwireError(Exception):
    """taskwire 基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方是否可以恢复（跳过记录、提示用户等）
        """
        super().__init__(message)
        self.recoverable = recoverable


class MalformedTimestamp(TaskwireError):
    """时间戳字符串不符合 YYYYMMDDTHHMMSSZ 格式"""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"无效时间戳 {text!r}: {reason}")
        self.text = text
        self.reason = reason


class MalformedDuration(TaskwireError):
    """时长字符串不符合 P[nY][nM][nD][T[nH][nM][nS]] 语法"""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"无效时长 {text!r}: {reason}")
        self.text = text
        self.reason = reason


# ============================================================
# Record 解码
# ============================================================


class DecodeError(TaskwireError):
    """Task JSON 解码失败"""


class InvalidJson(DecodeError):
    """输入不是合法 JSON，或顶层不是对象"""

    def __init__(self, reason: str) -> None:
        super().__init__(f"无效 Task JSON: {reason}")
        self.reason = reason


class MissingField(DecodeError):
    """缺少必填字段"""

    def __init__(self, name: str) -> None:
        super().__init__(f"缺少必填字段: {name}")
        self.name = name


class InvalidField(DecodeError):
    """字段存在但无法解码

    cause 为底层 codec 异常或错误描述。
    """

    def __init__(self, name: str, cause: Exception | str) -> None:
        super().__init__(f"字段 {name} 无效: {cause}")
        self.name = name
        self.cause = cause


# ============================================================
# Hook 参数
# ============================================================


class ArgError(TaskwireError):
    """Hook 参数解析失败"""


class TooFewArguments(ArgError):
    """参数个数不足"""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"hook 参数不足: 需要 {expected} 个，实际 {got} 个")
        self.expected = expected
        self.got = got


class UnknownHookFilename(ArgError):
    """hook 脚本文件名无法识别（应为 on-<event>...）"""

    def __init__(self, filename: str) -> None:
        super().__init__(f"无法识别的 hook 文件名: {filename!r}")
        self.filename = filename


class UnknownApiVersion(ArgError):
    """未知的 hook API 版本标记"""

    def __init__(self, token: str) -> None:
        super().__init__(f"未知的 hook API 版本: {token!r}")
        self.token = token
