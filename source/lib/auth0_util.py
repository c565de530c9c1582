######################################################################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.                                                #
#                                                                                                                    #
#  Licensed under the Apache License, Version 2.0 (the "License"). You may not use this file except in compliance    #
#  with the License. A copy of the License is located at                                                             #
#                                                                                                                    #
#      http://www.apache.org/licenses/LICENSE-2.0                                                                    #
#                                                                                                                    #
#  or in the "license" file accompanying this file. This file is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES #
#  OR CONDITIONS OF ANY KIND, express or implied. See the License for the specific language governing permissions    #
#  and limitations under the License.                                                                                #
######################################################################################################################


import time
import requests
from urllib.parse import quote
from http import HTTPStatus
from backoff import on_exception, expo, full_jitter
from lib.log_stream_model import LogStream

API_CALL_NUM_RETRIES = 5
MAX_TIME = 20
TOKEN_EXPIRY_LEEWAY = 60
RETRYABLE_STATUS_CODES = {
    HTTPStatus.TOO_MANY_REQUESTS,
    HTTPStatus.INTERNAL_SERVER_ERROR,
    HTTPStatus.BAD_GATEWAY,
    HTTPStatus.SERVICE_UNAVAILABLE,
    HTTPStatus.GATEWAY_TIMEOUT
}
# methods that can be sent again when the outcome of a call is unknown
IDEMPOTENT_METHODS = {'GET', 'PATCH', 'DELETE'}


class ManagementError(Exception):
    """
    Error response of the Auth0 Management API, e.g.
    {"statusCode": 404, "error": "Not Found", "message": "The log stream does not exist", "errorCode": "inexistent_log_stream"}
    """
    def __init__(self, status_code, error=None, message=None, error_code=None):
        self.status_code = int(status_code)
        self.error = error
        self.message = message
        self.error_code = error_code
        self.retryable = self.status_code in RETRYABLE_STATUS_CODES
        super().__init__("%s %s: %s" % (self.status_code, error or '', message or ''))

    @classmethod
    def from_response(cls, response):
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            status_code=body.get('statusCode', response.status_code),
            error=body.get('error', response.reason),
            message=body.get('message', response.text),
            error_code=body.get('errorCode')
        )


def is_not_found(error) -> bool:
    return isinstance(error, ManagementError) and error.status_code == HTTPStatus.NOT_FOUND


def give_up(error) -> bool:
    # connection errors and timeouts are retried unless request() marked them otherwise
    return not getattr(error, 'retryable', True)


class Auth0Management(object):
    """
    Minimal Auth0 Management API v2 client. Obtains a token with the client
    credentials grant unless a static API token is configured, and retries
    rate limited or failed calls with exponential backoff.
    """
    def __init__(self, log, config, session=None):
        self.log = log
        self.config = config
        self.session = session or requests.Session()
        self._access_token = config.api_token
        self._token_expires_at = None if config.api_token else 0
        self.log_stream = LogStreamManager(self)

    def get_access_token(self) -> str:
        if self._token_expires_at is None or time.time() < self._token_expires_at:
            return self._access_token

        self.log.debug("[auth0_util: get_access_token] Requesting management api token")
        response = self.session.post(
            self.config.base_url + '/oauth/token',
            json={
                'grant_type': 'client_credentials',
                'client_id': self.config.client_id,
                'client_secret': self.config.client_secret,
                'audience': self.config.audience
            },
            timeout=self.config.timeout
        )
        if response.status_code >= 400:
            raise ManagementError.from_response(response)

        body = response.json()
        self._access_token = body['access_token']
        self._token_expires_at = time.time() + int(body.get('expires_in', 86400)) - TOKEN_EXPIRY_LEEWAY
        return self._access_token

    def uri(self, *path) -> str:
        return self.config.audience + '/'.join(quote(p, safe='') for p in path)

    @on_exception(expo,
                  (ManagementError, requests.exceptions.ConnectionError, requests.exceptions.Timeout),
                  max_time=MAX_TIME,
                  max_tries=API_CALL_NUM_RETRIES,
                  jitter=full_jitter,
                  giveup=give_up)
    def request(self, method, uri, payload=None):
        self.log.debug("[auth0_util: request] %s %s", method, uri)

        try:
            response = self.session.request(
                method,
                uri,
                json=payload,
                headers={
                    'Authorization': 'Bearer ' + self.get_access_token(),
                    'Content-Type': 'application/json'
                },
                timeout=self.config.timeout
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as error:
            # only a connect timeout proves a POST never reached Auth0
            if method not in IDEMPOTENT_METHODS and not isinstance(error, requests.exceptions.ConnectTimeout):
                error.retryable = False
            raise

        if response.status_code >= 400:
            error = ManagementError.from_response(response)
            if method not in IDEMPOTENT_METHODS and error.status_code != HTTPStatus.TOO_MANY_REQUESTS:
                error.retryable = False
            raise error
        if response.status_code == HTTPStatus.NO_CONTENT or not response.content:
            return None
        return response.json()


class LogStreamManager(object):
    """Log stream endpoints of the Management API."""

    def __init__(self, management):
        self.management = management

    def create(self, log_stream: LogStream) -> None:
        """Create a log stream. The id and computed fields of the response are written back to log_stream."""
        data = self.management.request('POST', self.management.uri('log-streams'), log_stream.to_payload())
        log_stream.merge_payload(data or {})

    def read(self, log_stream_id: str) -> LogStream:
        data = self.management.request('GET', self.management.uri('log-streams', log_stream_id))
        return LogStream.from_payload(data or {})

    def update(self, log_stream_id: str, log_stream: LogStream) -> None:
        data = self.management.request('PATCH', self.management.uri('log-streams', log_stream_id),
                                       log_stream.to_payload())
        log_stream.merge_payload(data or {})

    def delete(self, log_stream_id: str) -> None:
        self.management.request('DELETE', self.management.uri('log-streams', log_stream_id))
