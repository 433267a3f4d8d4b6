"""
Contains the errors raised when accessing Swift services.

Errors with a status code derive from :py:class:`StatusError`; errors
raised before any status code could be obtained derive from
:py:class:`TransportError`. Both derive from :py:class:`StorageError`.
"""
"""
Copyright 2011-2013 Gregory Holt

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

#: Status codes worth trying again later, beyond the 5xx family.
RETRYABLE_STATUSES = (408, 429)

#: 5xx status codes that will not change by trying again.
FATAL_SERVER_STATUSES = (501, 505)


def is_retryable(value):
    """
    Returns True if the error or HTTP status code given indicates a
    condition that may clear up if the request is sent again.

    The library itself never retries; this is the policy a higher
    layer can use to decide.
    """
    if isinstance(value, StorageError):
        return value.retryable
    status = int(value)
    if status in RETRYABLE_STATUSES:
        return True
    return status // 100 == 5 and status not in FATAL_SERVER_STATUSES


class StorageError(Exception):
    """
    The base class for all errors raised by swiftstore.
    """

    @property
    def retryable(self):
        return False


class TransportError(StorageError):
    """
    The request could not be completed at the protocol level, such as
    a DNS failure, refused connection, or unparseable response.
    """

    @property
    def retryable(self):
        return True


class StatusError(StorageError):
    """
    The server answered with a status code the operation treats as a
    failure.

    :param status: The int HTTP status code.
    :param reason: The str HTTP reason phrase.
    :param method: The request method.
    :param url: The request URL.
    :param operation: The name of the operation being performed,
        such as ``'delete container'``.
    """

    def __init__(self, status, reason=None, method=None, url=None,
                 operation=None, message=None):
        self.status = status
        self.reason = reason or 'Unknown'
        self.method = method
        self.url = url
        self.operation = operation
        if not message:
            message = '%s %s' % (self.status, self.reason)
            if method and url:
                message = '%s %s failed: %s' % (method, url, message)
            if operation:
                message = '%s: %s' % (operation, message)
        super(StatusError, self).__init__(message)

    @property
    def retryable(self):
        return is_retryable(self.status)


class NotFound(StatusError):
    """
    The resource does not exist (404).
    """


class NoResponseError(NotFound, TransportError):
    """
    The transport failed without any response metadata at all. Some
    minimal HTTP implementations report a 404 this way so it is
    treated as one.
    """

    def __init__(self, message=None, method=None, url=None):
        super(NoResponseError, self).__init__(
            404, 'Not Found', method=method, url=url,
            message=message or
            'No response received, perhaps due to a network failure.')

    @property
    def retryable(self):
        return False


class Conflict(StatusError):
    """
    The request conflicts with the current state of the resource (409).
    """


class ContainerNotEmpty(Conflict):
    """
    A container still holding objects cannot be deleted.
    """


class AuthorizationError(StatusError):
    """
    The token was refused (401) or a credential exchange failed.
    """


class Forbidden(StatusError):
    """
    The token is valid but lacks access to the resource (403).
    """


class LengthRequired(StatusError):
    """
    The server needs a Content-Length or chunked transfer (411).
    """


class UnprocessableEntity(StatusError):
    """
    The uploaded content did not match its given ETag (422).
    """


class UnexpectedStatus(StatusError):
    """
    The status code is not one the operation knows about.
    """


class ServerError(UnexpectedStatus):
    """
    The server failed to handle the request (5xx).
    """


#: The generic status code to error class policy used when no
#: per-operation table applies.
FAILURES = {
    401: AuthorizationError,
    403: Forbidden,
    404: NotFound,
    409: Conflict,
    411: LengthRequired,
    422: UnprocessableEntity,
}


def error_class(status):
    """
    Returns the error class the generic policy uses for the status.
    """
    cls = FAILURES.get(status)
    if cls:
        return cls
    if status // 100 == 5:
        return ServerError
    return UnexpectedStatus


def failure(status, reason=None, method=None, url=None, operation=None):
    """
    Raises the error the generic policy uses for the status.
    """
    raise error_class(status)(
        status, reason, method=method, url=url, operation=operation)
