from flask import jsonify


class ApiResponse:
    """The {message, data} envelope and the status it is sent with."""

    def __init__(self, message, data=None, status=200, headers=None):
        self.message = message
        self.data = data
        self.status = status
        self.headers = dict(headers or {})

    @classmethod
    def from_error(cls, error):
        headers = {}
        if error.status_code == 429:
            headers["Retry-After"] = str(error.retry_after)
        return cls(error.message, error.data, error.status_code, headers)

    @property
    def body(self):
        return {"message": self.message, "data": self.data}

    def to_response(self):
        response = jsonify(self.body)
        response.status_code = self.status
        for name, value in self.headers.items():
            response.headers[name] = value
        return response

    def __repr__(self):
        return f"<ApiResponse {self.status} {self.message!r}>"
