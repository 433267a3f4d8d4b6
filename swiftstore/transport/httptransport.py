"""
Provides the socket based transport for accessing Swift services.
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
from urllib import parse

from swiftstore.exceptions import TransportError
from swiftstore.transport.transport import Transport, Response, \
    NOTIFY_RESOLVE, NOTIFY_CONNECT, NOTIFY_FAILURE
from swiftstore.utils import headers_to_dict, titled_headers, \
    verbose_headers


class HTTPTransport(Transport):
    """
    The socket based transport for accessing Swift services. A new
    connection is made for each request and closed once the response
    has been read.

    Request bodies given as file-like objects are streamed to the
    server chunk_size bytes at a time, using chunked transfer
    encoding unless a Content-Length header is given.

    :param config: The
        :py:class:`swiftstore.transport.transport.TransportConfig` to
        use.
    :param eventlet: Default: None. If True, Eventlet will be used if
        installed. If False, Eventlet will not be used even if
        installed. If None, the default, Eventlet will be used if
        installed.
    """

    def __init__(self, config=None, eventlet=None):
        super(HTTPTransport, self).__init__(config)
        if eventlet is None:
            try:
                import eventlet as _eventlet  # noqa
                eventlet = True
            except ImportError:
                eventlet = False
        self.eventlet = False
        if eventlet:
            try:
                from eventlet.green.http import client as http_client
                self.eventlet = True
            except ImportError:
                import http.client as http_client
        else:
            import http.client as http_client
        self.HTTPConnection = http_client.HTTPConnection
        self.HTTPSConnection = http_client.HTTPSConnection
        self.HTTPException = http_client.HTTPException

    def _connect(self, url):
        parsed = parse.urlparse(url)
        http_proxy_parsed = parse.urlparse(self.config.http_proxy) \
            if self.config.http_proxy else None
        netloc = (http_proxy_parsed or parsed).netloc
        if parsed.scheme == 'http':
            self.verbose('Establishing HTTP connection to %s', netloc)
            conn = self.HTTPConnection(netloc, timeout=self.config.timeout)
        elif parsed.scheme == 'https':
            self.verbose('Establishing HTTPS connection to %s', netloc)
            conn = self.HTTPSConnection(
                netloc, timeout=self.config.timeout,
                context=self._ssl_context())
        else:
            raise TransportError(
                'Cannot handle protocol scheme %s for url %s' %
                (parsed.scheme, repr(url)))
        if http_proxy_parsed:
            self.verbose(
                'Setting tunnelling to %s:%s', parsed.hostname, parsed.port)
            conn.set_tunnel(parsed.hostname, parsed.port)
        return parsed, conn

    def send(self, url, method='GET', headers=None, body=b''):
        """
        See :py:func:`swiftstore.transport.transport.Transport.send`
        """
        return self._request(url, method, headers, self._encode_body(body))

    def send_with_stream(self, url, method, headers, resource):
        """
        See
        :py:func:`swiftstore.transport.transport.Transport.send_with_stream`

        File-like resources are streamed rather than read into memory.
        """
        if not hasattr(resource, 'read'):
            return self.send(url, method, headers, resource)
        return self._request(url, method, headers, resource)

    def _request(self, url, method, headers, contents):
        method = method.upper()
        parsed, conn = self._connect(url)
        path = parsed.path or '/'
        if parsed.query:
            path += '?' + parsed.query
        hdrs = titled_headers(
            {'User-Agent': self.config.user_agent, 'Connection': 'close'},
            headers)
        try:
            self.notify(NOTIFY_RESOLVE, parsed.netloc)
            conn.connect()
            self.notify(NOTIFY_CONNECT, parsed.netloc)
            if not hasattr(contents, 'read'):
                if method not in self.no_content_methods and contents and \
                        'Content-Length' not in hdrs and \
                        'Transfer-Encoding' not in hdrs:
                    hdrs['Content-Length'] = str(len(contents))
                self.verbose(
                    '> %s %s %s', method, url, verbose_headers(hdrs))
                conn.request(method, path, contents or None, hdrs)
            else:
                self._stream_request(conn, method, url, path, hdrs, contents)
            resp = conn.getresponse()
            status = resp.status
            reason = resp.reason
            self.verbose('< %s %s', status, reason)
            raw_headers = resp.getheaders()
            hdrs = headers_to_dict(raw_headers)
            body = self._read_response(resp, status, reason, hdrs)
            resp.close()
        except (OSError, self.HTTPException) as err:
            self.verbose('< - %s %s', type(err).__name__, err)
            self.notify(NOTIFY_FAILURE, str(err))
            raise TransportError(
                '%s %s failed: %s %s' % (method, url, type(err).__name__, err))
        finally:
            conn.close()
        return Response(
            status, reason, hdrs, body, method=method, url=url,
            raw_headers=raw_headers)

    def _stream_request(self, conn, method, url, path, hdrs, contents):
        conn.putrequest(method, path, skip_accept_encoding=True)
        content_length = None
        for h, v in sorted(hdrs.items()):
            if h == 'Content-Length':
                content_length = int(v)
            conn.putheader(h, v)
        chunked = method not in self.no_content_methods and \
            content_length is None
        if chunked:
            hdrs['Transfer-Encoding'] = 'chunked'
            conn.putheader('Transfer-Encoding', 'chunked')
        conn.endheaders()
        self.verbose('> %s %s %s', method, url, verbose_headers(hdrs))
        if chunked:
            chunk = self._encode_body(contents.read(self.config.chunk_size))
            while chunk:
                conn.send(b'%x\r\n' % len(chunk) + chunk + b'\r\n')
                chunk = self._encode_body(
                    contents.read(self.config.chunk_size))
            conn.send(b'0\r\n\r\n')
        else:
            left = content_length or 0
            while left > 0:
                size = self.config.chunk_size
                if size > left:
                    size = left
                chunk = self._encode_body(contents.read(size))
                if not chunk:
                    raise TransportError(
                        '%s %s failed: Early EOF from input' % (method, url))
                conn.send(chunk)
                left -= len(chunk)
