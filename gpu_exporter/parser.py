"""
CSV 解析器

将 nvidia-smi 的 csv,noheader,nounits 输出解析为行列表
"""

import csv
import io
from typing import List


class ParseError(Exception):
    """CSV 输出格式错误（列数不一致、引号未闭合等）"""

    def __init__(self, message: str, line: int = 0):
        self.line = line
        if line:
            message = f"line {line}: {message}"
        super().__init__(message)


def parse_rows(raw: bytes) -> List[List[str]]:
    """
    解析 CSV 输出

    规则：
    - 逗号分隔，字段的前导空白被去除
    - 未加引号的字段中不允许出现双引号
    - 无表头，空行忽略
    - 每行列数必须与第一行一致

    Args:
        raw: 命令标准输出

    Returns:
        行列表，顺序与输入一致（即设备枚举顺序）

    Raises:
        ParseError: 输入格式错误
    """
    text = raw.decode("utf-8", errors="replace")
    _check_bare_quotes(text)

    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=",",
        skipinitialspace=True,
        strict=True,
    )

    rows = []
    expected = None
    try:
        for row in reader:
            if not row:
                continue
            if expected is None:
                expected = len(row)
            elif len(row) != expected:
                raise ParseError(
                    f"wrong number of fields: expected {expected}, got {len(row)}",
                    line=reader.line_num,
                )
            # skipinitialspace 只处理空格，制表符等其余空白在这里去除
            rows.append([cell.lstrip() for cell in row])
    except csv.Error as e:
        raise ParseError(str(e), line=reader.line_num) from e

    return rows


def _check_bare_quotes(text: str):
    """
    检查未加引号的字段中是否出现双引号

    csv 模块会把这类引号当作普通字符，这里按格式错误处理

    Raises:
        ParseError: 出现裸引号
    """
    field_start, unquoted, quoted, quote_in_quoted = range(4)
    state = field_start
    line = 1

    for ch in text:
        if ch == "\n" and state != quoted:
            state = field_start
            line += 1
        elif state == field_start:
            if ch == '"':
                state = quoted
            elif ch != "," and not ch.isspace():
                state = unquoted
        elif state == unquoted:
            if ch == '"':
                raise ParseError('bare " in non-quoted field', line=line)
            if ch == ",":
                state = field_start
        elif state == quoted:
            if ch == '"':
                state = quote_in_quoted
            elif ch == "\n":
                line += 1
        else:
            # "" 为转义引号，其余情况交给 csv 模块报错
            if ch == '"':
                state = quoted
            elif ch == ",":
                state = field_start
            else:
                state = unquoted
