from cafe.lib.logger import logger


class Response:

    def __init__(self, code=200, message="", data=None, status=200):
        try:
            self.status = status
            self.message = message
            self.data = data if data is not None else {}
            self.code = code
        except Exception as e:
            logger.error(f"Error in Response __init__: {e}", exc_info=True)
            self.status = 500
            self.message = "Internal Server Error"
            self.data = {}
            self.code = 500

    def to_dict(self):
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }, self.status

    def to_error(self):
        return {
            "error": self.message,
            "code": self.code,
        }, self.status
