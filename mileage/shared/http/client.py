"""HTTPクライアント"""

from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from ..exceptions.errors import ServiceError
from ..logging.config import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """
    Mapbox API呼び出し用のHTTPクライアント

    Features:
    - タイムアウト設定
    - セッション管理（並列ジオコーディング用のコネクションプール）
    - リトライなし（失敗は呼び出し側で実行全体を中断する）
    """

    def __init__(
        self,
        timeout: int = 20,
        pool_maxsize: int = 10,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            pool_maxsize: コネクションプールの最大サイズ
            user_agent: User-Agentヘッダー
        """
        self.timeout = timeout
        self.pool_maxsize = pool_maxsize
        self.user_agent = user_agent or "mileage-table/1.0"

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """セッションを作成"""
        session = requests.Session()

        adapter = HTTPAdapter(pool_maxsize=self.pool_maxsize, max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({"User-Agent": self.user_agent})

        return session

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        """
        GETリクエスト

        Args:
            url: リクエストURL
            params: クエリパラメータ（アクセストークンはここに渡す）
            headers: 追加ヘッダー

        Returns:
            レスポンスオブジェクト

        Raises:
            ServiceError: リクエスト失敗時（2xx以外を含む）
        """
        try:
            logger.debug(f"GET request to {url}")
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )

            response.raise_for_status()
            logger.debug(f"GET request successful: {url} (status={response.status_code})")
            return response

        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"GET request failed: {url} (HTTP {status})")
            raise ServiceError(f"Request to {url} failed (HTTP {status})") from e
        except requests.RequestException as e:
            logger.error(f"GET request failed: {url} - {type(e).__name__}")
            raise ServiceError(f"Failed to GET {url}: {type(e).__name__}") from e

    def get_json(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        GETリクエストを送信し、JSONとしてデコード

        Raises:
            ServiceError: リクエスト失敗時、またはレスポンスがJSONでない場合
        """
        response = self.get(url, params=params)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from {url}")
            raise ServiceError(f"Invalid JSON response from {url}") from e

    def close(self) -> None:
        """セッションをクローズ"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
