"""
Provides a minimal buffered transport for accessing Swift services.
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
import http.client
from urllib import error, request

from swiftstore.exceptions import NoResponseError, TransportError, failure
from swiftstore.transport.transport import Transport, Response, \
    NOTIFY_CONNECT, NOTIFY_FAILURE, NOTIFY_RESOLVE
from swiftstore.utils import headers_to_dict, titled_headers, \
    verbose_headers, parse_status_line


class BufferedTransport(Transport):
    """
    A minimal transport built on urllib.request. Request bodies are
    always sent from memory.

    .. note::

        Since urllib.request can only send a buffered body,
        :py:func:`send_with_stream` reads a file-like resource in its
        entirety before the request is sent. Use
        :py:class:`swiftstore.transport.httptransport.HTTPTransport`
        for large uploads.

    Error statuses reported by urllib are returned as ordinary
    responses. When urllib fails without any response, the
    diagnostic text is searched for an HTTP status line; if one is
    found the matching error is raised, if the text is empty the
    failure is treated as a 404 and
    :py:class:`swiftstore.exceptions.NoResponseError` is raised, and
    otherwise :py:class:`swiftstore.exceptions.TransportError` is
    raised.

    :param config: The
        :py:class:`swiftstore.transport.transport.TransportConfig` to
        use.
    """

    def __init__(self, config=None):
        super(BufferedTransport, self).__init__(config)
        handlers = [request.HTTPSHandler(context=self._ssl_context())]
        if self.config.http_proxy:
            handlers.append(request.ProxyHandler({
                'http': self.config.http_proxy,
                'https': self.config.http_proxy}))
        else:
            handlers.append(request.ProxyHandler({}))
        self.opener = request.build_opener(*handlers)

    def send(self, url, method='GET', headers=None, body=b''):
        """
        See :py:func:`swiftstore.transport.transport.Transport.send`
        """
        method = method.upper()
        body = self._encode_body(body)
        hdrs = titled_headers(
            {'User-Agent': self.config.user_agent, 'Connection': 'close'},
            headers)
        if method not in self.no_content_methods and \
                'Content-Length' not in hdrs:
            hdrs['Content-Length'] = str(len(body))
        req = request.Request(
            url, data=body if method not in self.no_content_methods else None,
            headers=hdrs, method=method)
        self.verbose('> %s %s %s', method, url, verbose_headers(hdrs))
        self.notify(NOTIFY_RESOLVE, url)
        self.notify(NOTIFY_CONNECT, url)
        try:
            resp = self.opener.open(req, timeout=self.config.timeout)
        except error.HTTPError as err:
            resp = err
        except (error.URLError, OSError, http.client.HTTPException) as err:
            self.guess_error(err, url, method)
        try:
            status = resp.getcode()
            reason = resp.reason
            self.verbose('< %s %s', status, reason)
            raw_headers = resp.headers.items()
            hdrs = headers_to_dict(raw_headers)
            body = self._read_response(resp, status, reason, hdrs)
        except (OSError, http.client.HTTPException) as err:
            self.guess_error(err, url, method)
        finally:
            resp.close()
        return Response(
            status, reason, hdrs, body, method=method, url=url,
            raw_headers=raw_headers)

    def guess_error(self, err, url, method):
        """
        Raises the most fitting error for a failure that produced no
        response.
        """
        text = err.reason if isinstance(err, error.URLError) else err
        text = str(text or '')
        self.verbose('< - %s', text or 'no response')
        self.notify(NOTIFY_FAILURE, text)
        if not text:
            raise NoResponseError(method=method, url=url)
        status_line = parse_status_line(text)
        if not status_line:
            raise TransportError('%s %s failed: %s' % (method, url, text))
        failure(status_line[0], status_line[1], method=method, url=url)
