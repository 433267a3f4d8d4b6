"""
Contains the base Transport class for sending requests to Swift
services, along with the Response it returns and the TransportConfig
it is constructed with.
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
import json
import os
import ssl
import sys

from swiftstore import VERSION
from swiftstore.utils import parse_bool


#: The host name has been resolved.
NOTIFY_RESOLVE = 'resolve'
#: A connection to the server has been established.
NOTIFY_CONNECT = 'connect'
#: The Content-Type of the response is known.
NOTIFY_MIME_TYPE = 'mime-type'
#: The Content-Length of the response is known.
NOTIFY_FILE_SIZE = 'file-size'
#: The response status line and headers have been received.
NOTIFY_HEADER_RECEIVED = 'header-received'
#: More of the response body has been read.
NOTIFY_PROGRESS = 'progress'
#: The response has been read in its entirety.
NOTIFY_COMPLETE = 'complete'
#: The request failed at the protocol level.
NOTIFY_FAILURE = 'failure'


class Response(object):
    """
    A normalized response from a Transport.

    :param status: The int HTTP status code.
    :param reason: The str for the HTTP status (ex: "OK").
    :param headers: A dict with all lowercase keys of the HTTP
        headers; if a header has multiple values, it will be a list.
    :param body: The bytes of the response body.
    :param method: The request method that produced this response.
    :param url: The request URL that produced this response.
    :param raw_headers: The list of (name, value) tuples of the HTTP
        headers with the names as the server sent them. Default: the
        items of headers.
    """

    def __init__(self, status, reason='', headers=None, body=b'',
                 method=None, url=None, raw_headers=None):
        self.status = status
        self.reason = reason
        self.headers = headers or {}
        self.body = body or b''
        self.method = method
        self.url = url
        if raw_headers is None:
            raw_headers = []
            for k, v in self.headers.items():
                if isinstance(v, list):
                    raw_headers.extend((k, i) for i in v)
                else:
                    raw_headers.append((k, v))
        self.raw_headers = list(raw_headers)

    def __repr__(self):
        return 'Response(%r, %r)' % (self.status, self.reason)

    def header(self, name, default=None):
        """
        Returns the value of the named header, case insensitively, or
        the default if the header is absent. If the header occurred
        more than once the first value is returned.
        """
        value = self.headers.get(name.lower())
        if value is None:
            return default
        if isinstance(value, list):
            return value[0]
        return value

    @property
    def text(self):
        return self.body.decode('utf8')

    def json(self):
        """
        Returns the JSON decoded body, or None if the body is empty.
        """
        if not self.body:
            return None
        return json.loads(self.text)


class TransportConfig(object):
    """
    The settings a Transport is constructed with.

    :param timeout: Seconds to wait on socket operations. Default:
        None, which waits as long as the platform does.
    :param verify: Whether TLS certificates are verified. Default:
        True.
    :param ca_file: Path to a CA bundle for TLS verification.
    :param chunk_size: Maximum size to read or write at one time.
    :param http_proxy: The URL to the tunnelling HTTP proxy to use.
        Default: None.
    :param user_agent: The string to use for the User-Agent request
        header.
    :param debug: If True and no verbose function is given, verbose
        messages are written to stderr; and if no notification
        callback is registered, notifications are rendered as verbose
        messages.
    :param verbose: Set to a ``func(msg, *args)`` that will be called
        with debug messages. Constructing a string for output can be
        done with msg % args.
    :param verbose_id: Set to a string you wish verbose messages to
        be prepended with; can help in identifying output when
        multiple Transports are in use.
    """

    def __init__(self, timeout=None, verify=True, ca_file=None,
                 chunk_size=65536, http_proxy=None, user_agent=None,
                 debug=False, verbose=None, verbose_id=''):
        self.timeout = timeout
        self.verify = verify
        self.ca_file = ca_file
        self.chunk_size = chunk_size
        self.http_proxy = http_proxy
        self.user_agent = user_agent or 'swiftstore v%s' % VERSION
        self.debug = debug
        self.verbose = verbose
        self.verbose_id = verbose_id

    @classmethod
    def from_environ(cls, environ=None, prefix='SWIFTSTORE_', **kwargs):
        """
        Returns a TransportConfig built from environment variables,
        such as SWIFTSTORE_TIMEOUT, SWIFTSTORE_VERIFY,
        SWIFTSTORE_CA_FILE, SWIFTSTORE_CHUNK_SIZE,
        SWIFTSTORE_HTTP_PROXY, and SWIFTSTORE_DEBUG. Any keyword
        arguments given override the environment.
        """
        if environ is None:
            environ = os.environ
        settings = {}
        for name, convert in (
                ('timeout', float), ('verify', parse_bool),
                ('ca_file', str), ('chunk_size', int),
                ('http_proxy', str), ('user_agent', str),
                ('debug', parse_bool)):
            key = prefix + name.upper()
            value = environ.get(key)
            if value is None:
                continue
            try:
                settings[name] = convert(value)
            except ValueError:
                raise ValueError('Invalid value for %s: %r' % (key, value))
        settings.update(kwargs)
        return cls(**settings)


class Transport(object):
    """
    The base class for sending HTTP requests to Swift services.

    For concrete examples, see
    :py:class:`swiftstore.transport.httptransport.HTTPTransport` and
    :py:class:`swiftstore.transport.buffertransport.BufferedTransport`.

    To form a new concrete subclass, you would need to implement
    :py:func:`send` minimally and optionally
    :py:func:`send_with_stream` if the underlying mechanism can send
    a body without holding it all in memory.

    :param config: The :py:class:`TransportConfig` to use. Default: a
        TransportConfig with all default settings.
    """

    def __init__(self, config=None):
        self.config = config or TransportConfig()
        verbose = self.config.verbose
        if not verbose and self.config.debug:
            verbose = _stderr_verbose
        if verbose:
            self.verbose = lambda m, *a, **k: verbose(
                self._verbose_id + m, *a, **k)
        else:
            self.verbose = lambda *a, **k: None
        self.verbose_id = self.config.verbose_id
        self._verbose_id = self.verbose_id
        if self._verbose_id:
            self._verbose_id += ' '
        self.notification_callback = None
        #: These HTTP methods do not allow contents
        self.no_content_methods = ['COPY', 'DELETE', 'GET', 'HEAD']

    def on_notification(self, callback):
        """
        Registers a ``func(event, message, bytes_transferred,
        bytes_max)`` to be called as a request progresses. The event
        is one of the NOTIFY_* constants of this module. This is
        purely observational; the return value is ignored. Set to None
        to stop notifications.
        """
        self.notification_callback = callback

    def notify(self, event, message='', bytes_transferred=0, bytes_max=0):
        """
        Sends a notification to the registered callback, if any.
        """
        if self.notification_callback:
            self.notification_callback(
                event, message, bytes_transferred, bytes_max)
        elif self.config.debug:
            self.print_notification(
                event, message, bytes_transferred, bytes_max)

    def print_notification(self, event, message, bytes_transferred,
                           bytes_max):
        """
        Renders a notification as a verbose message.
        """
        if event == NOTIFY_RESOLVE:
            self.verbose('Resolved. %s', message)
        elif event == NOTIFY_CONNECT:
            self.verbose('Connect... %s', message)
        elif event == NOTIFY_FAILURE:
            self.verbose('Socket-level failure: %s', message)
        elif event == NOTIFY_COMPLETE:
            self.verbose('Transaction complete. %s', message)
        elif event == NOTIFY_FILE_SIZE:
            self.verbose('Content-Length: %d', bytes_max)
        elif event == NOTIFY_MIME_TYPE:
            self.verbose('Content-Type: %s', message)
        elif event == NOTIFY_PROGRESS:
            self.verbose(
                '%d bytes of %s', bytes_transferred, bytes_max or 'Unknown')
        else:
            self.verbose('Event: %s, Message: %s', event, message)

    def send(self, url, method='GET', headers=None, body=b''):
        """
        Performs an HTTP request and returns the
        :py:class:`Response`, whatever its status code.

        :param url: The full URL for the request.
        :param method: The request method ('GET', 'HEAD', etc.)
        :param headers: A dict of request headers and values.
        :param body: The bytes or str body of the request.
        :returns: A :py:class:`Response`.
        :raises TransportError: If no response could be obtained.
        """
        raise NotImplementedError('send method not implemented')

    def send_with_stream(self, url, method, headers, resource):
        """
        Performs an HTTP request whose body comes from the resource,
        which may be bytes, a str, or a readable file-like object.

        This base implementation can only send a buffered body, so
        a file-like resource is read entirely into memory before the
        request is sent. Subclasses that can stream override this.
        """
        if hasattr(resource, 'read'):
            chunks = []
            chunk = resource.read(self.config.chunk_size)
            while chunk:
                chunks.append(chunk)
                chunk = resource.read(self.config.chunk_size)
            resource = _join_chunks(chunks)
        return self.send(url, method, headers, resource)

    def _ssl_context(self):
        if self.config.verify:
            return ssl.create_default_context(cafile=self.config.ca_file)
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def _read_response(self, resp, status, reason, hdrs):
        self.notify(NOTIFY_HEADER_RECEIVED, '%s %s' % (status, reason))
        content_type = hdrs.get('content-type')
        if content_type:
            self.notify(NOTIFY_MIME_TYPE, content_type)
        try:
            bytes_max = int(hdrs.get('content-length') or 0)
        except ValueError:
            bytes_max = 0
        if bytes_max:
            self.notify(NOTIFY_FILE_SIZE, '', 0, bytes_max)
        chunks = []
        transferred = 0
        chunk = resp.read(self.config.chunk_size)
        while chunk:
            chunks.append(chunk)
            transferred += len(chunk)
            self.notify(NOTIFY_PROGRESS, '', transferred, bytes_max)
            chunk = resp.read(self.config.chunk_size)
        self.notify(NOTIFY_COMPLETE, '', transferred, bytes_max)
        return b''.join(chunks)

    def _encode_body(self, body):
        if body is None:
            return b''
        if isinstance(body, str):
            return body.encode('utf8')
        return body


def _join_chunks(chunks):
    if chunks and isinstance(chunks[0], str):
        return ''.join(chunks)
    return b''.join(chunks)


def _stderr_verbose(msg, *args):
    sys.stderr.write((msg % args if args else msg) + '\n')
    sys.stderr.flush()
