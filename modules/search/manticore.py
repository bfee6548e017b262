"""
Manticore Search client over the line-oriented text protocol.

Statements are written to a raw TCP socket terminated by a newline; the
daemon answers with a text table and closes the connection.
"""
import logging
import re
import socket
from typing import Dict, List, Optional

from django.conf import settings

from .exceptions import SearchBackendError

logger = logging.getLogger(__name__)

WILDCARD_CHARS = ('*', '?')
LEADING_ID_PATTERN = re.compile(r'^(\d+)\b')
INTEGER_PATTERN = re.compile(r'\d+')
RECV_CHUNK_SIZE = 8192


# ============================================================
# Query helpers
# ============================================================

def normalize_query(query: str) -> str:
    """
    Trim the query and wrap it as *query* unless it already has a wildcard.

    >>> normalize_query('john')
    '*john*'
    >>> normalize_query('john*')
    'john*'
    """
    query = (query or '').strip()
    if any(char in query for char in WILDCARD_CHARS):
        return query
    return f"*{query}*"


def escape_match(value: str) -> str:
    """Escape backslashes and quotes for use inside MATCH('...')."""
    return (
        value.replace('\\', '\\\\')
        .replace("'", "\\'")
        .replace('"', '\\"')
    )


def escape_value(value) -> str:
    """Render a value as a quoted string literal for INSERT statements."""
    if value is None:
        return "''"
    text = str(value).replace('\\', '\\\\').replace("'", "''")
    return f"'{text}'"


# ============================================================
# Response decoding
# ============================================================

def _split_cells(line: str) -> List[str]:
    return [cell.strip() for cell in line.strip().strip('|').split('|')]


def decode_rows(response: str) -> List[Dict[str, str]]:
    """
    Decode a daemon response into rows keyed by column name.

    Table responses are keyed by their header row and only their `|` rows
    count. Otherwise, lines that start with a number yield a row with that
    number as its id. Border lines (starting with + or -) and blank lines
    are ignored.

    Raises:
        SearchBackendError: If the daemon reported an error.
    """
    rows = []
    header: Optional[List[str]] = None
    for raw_line in response.splitlines():
        line = raw_line.strip()
        if not line or line[0] in '+-':
            continue
        if line.upper().startswith('ERROR'):
            raise SearchBackendError(f"Search daemon error: {line}")
        if line.startswith('|'):
            cells = _split_cells(line)
            if header is None and not cells[0].isdigit():
                header = [cell.lower() for cell in cells]
                continue
            columns = header or ['id']
            rows.append(dict(zip(columns, cells)))
            continue
        if header is not None:
            # trailing status lines such as "2 rows in set"
            continue
        match = LEADING_ID_PATTERN.match(line)
        if match:
            rows.append({'id': match.group(1)})
    return rows


def parse_match_ids(response: str) -> List[int]:
    """Order ids from a SELECT response, in response order, without duplicates."""
    ids = []
    for row in decode_rows(response):
        value = row.get('id', '')
        if value.isdigit() and int(value) not in ids:
            ids.append(int(value))
    return ids


def parse_count(response: str) -> int:
    """
    Total from a COUNT(*) response.

    Raises:
        SearchBackendError: If the response holds no integer.
    """
    for row in decode_rows(response):
        for value in row.values():
            if value.isdigit():
                return int(value)
    match = INTEGER_PATTERN.search(response)
    if match is None:
        raise SearchBackendError("Search daemon returned no count")
    return int(match.group(0))


# ============================================================
# Client
# ============================================================

class ManticoreClient:
    """Executes one statement per connection against the search daemon."""

    def __init__(
        self,
        host: str = None,
        port: int = None,
        index: str = None,
        connect_timeout: float = None,
        read_timeout: float = None,
    ):
        self.host = host or settings.MANTICORE_HOST
        self.port = port or settings.MANTICORE_PORT
        self.index = index or settings.MANTICORE_INDEX
        self.connect_timeout = connect_timeout or settings.MANTICORE_CONNECT_TIMEOUT
        self.read_timeout = read_timeout or settings.MANTICORE_READ_TIMEOUT

    def execute(self, sql: str) -> str:
        """
        Send a statement and read the answer until the daemon closes the stream.

        Raises:
            SearchBackendError: On connection, timeout or transport failure.
        """
        logger.debug(f"Manticore query: {sql}")
        chunks = []
        try:
            with socket.create_connection((self.host, self.port), timeout=self.connect_timeout) as sock:
                sock.settimeout(self.read_timeout)
                sock.sendall(sql.encode('utf-8') + b'\n')
                while True:
                    chunk = sock.recv(RECV_CHUNK_SIZE)
                    if not chunk:
                        break
                    chunks.append(chunk)
        except OSError as e:
            raise SearchBackendError(f"Search daemon at {self.host}:{self.port} unavailable: {e}") from e
        return b''.join(chunks).decode('utf-8', errors='replace')

    def ping(self) -> bool:
        """True if a TCP connection to the daemon can be opened."""
        try:
            with socket.create_connection((self.host, self.port), timeout=self.connect_timeout):
                return True
        except OSError:
            return False

    # Statement builders

    def match_sql(self, query: str, offset: int, limit: int) -> str:
        match = escape_match(normalize_query(query))
        return f"SELECT * FROM {self.index} WHERE MATCH('{match}') LIMIT {offset}, {limit}"

    def count_sql(self, query: str) -> str:
        match = escape_match(normalize_query(query))
        return f"SELECT COUNT(*) FROM {self.index} WHERE MATCH('{match}')"

    def insert_sql(self, document: Dict[str, object]) -> str:
        columns = ', '.join(document.keys())
        values = ', '.join(
            str(value) if isinstance(value, int) and not isinstance(value, bool) else escape_value(value)
            for value in document.values()
        )
        return f"REPLACE INTO {self.index} ({columns}) VALUES ({values})"

    def delete_sql(self, order_id: int) -> str:
        return f"DELETE FROM {self.index} WHERE id = {int(order_id)}"
