"""キャッシュ・プロバイダクライアント・ハンドラで共通のエラー分類

各エラーは対応するHTTPステータスと、呼び出し側に見せてよいメッセージを持つ。
元の例外メッセージはサーバーログにだけ残す。
"""

GENERIC_MESSAGE = "Sorry something went wrong!"


class CityExplorerError(Exception):
    status_code = 500
    public_message = GENERIC_MESSAGE

    def __init__(self, message: str = ""):
        super().__init__(message or self.public_message)


class InvalidQuery(CityExplorerError):
    """クエリパラメータがない、または形式が正しくない"""
    status_code = 400

    def __init__(self, message: str = "Invalid query"):
        super().__init__(message)

    @property
    def public_message(self) -> str:
        return str(self)


class NotFound(CityExplorerError):
    """プロバイダは正常に応答したが結果が0件"""
    status_code = 404
    public_message = "No results found"


class NetworkFailure(CityExplorerError):
    """上流に接続できない、または2xx以外のステータス"""
    status_code = 502


class MalformedResponse(CityExplorerError):
    """上流のレスポンスがJSONでない、または必要な項目がない"""
    status_code = 502


class StoreFailure(CityExplorerError):
    """位置情報DBの接続・クエリエラー"""
    status_code = 500
