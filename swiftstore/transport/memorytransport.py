"""A transport that keeps a pretend Swift account in memory.
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
import hashlib
import json
from datetime import datetime, timezone
from email.utils import formatdate
from time import time
from urllib import parse
from uuid import uuid4

from swiftstore.exceptions import NoResponseError
from swiftstore.transport.transport import Transport, Response, \
    NOTIFY_CONNECT, NOTIFY_COMPLETE
from swiftstore.utils import headers_to_dict, titled_headers, \
    verbose_headers


#: Responses for the status codes the pretend account can return.
REASONS = {
    200: 'OK', 201: 'Created', 202: 'Accepted', 204: 'No Content',
    401: 'Unauthorized', 404: 'Not Found', 405: 'Method Not Allowed',
    409: 'Conflict', 422: 'Unprocessable Entity'}

CONTAINER_HEADER_PREFIXES = (
    'X-Container-Meta-', 'X-Container-Read', 'X-Container-Write')

OBJECT_META_PREFIX = 'X-Object-Meta-'


class MemoryTransport(Transport):
    """A transport that pretends to be a Swift account, holding all
    containers and objects in memory.

    .. note::

        This implements the account, container, and object requests
        swiftstore itself makes and no-ops a lot of other Swift
        behavior. It is meant for tests and offline use.

    :param account_url: The storage URL of the pretend account.
    :param token: If set, requests must carry this X-Auth-Token or
        they receive a 401.
    :param users: A dict of user to key for the legacy auth endpoint,
        which lives at ``<scheme>://<netloc>/auth/v1.0``. Successful
        auth issues the token (a new one is made if token is None).
    :param config: The
        :py:class:`swiftstore.transport.transport.TransportConfig` to
        use.
    """

    def __init__(self, account_url='memory://swift/v1/AUTH_test',
                 token=None, users=None, config=None):
        super(MemoryTransport, self).__init__(config)
        self.account_url = account_url.rstrip('/')
        parsed = parse.urlparse(self.account_url)
        self.auth_url = '%s://%s/auth/v1.0' % (parsed.scheme, parsed.netloc)
        self.token = token
        self.users = dict(users or {})
        self.account_headers = {}
        self.containers = {}
        #: Every (method, url, headers) sent, oldest first.
        self.requests = []

    def send(self, url, method='GET', headers=None, body=b''):
        """
        See :py:func:`swiftstore.transport.transport.Transport.send`
        """
        method = method.upper()
        body = self._encode_body(body)
        hdrs = titled_headers(
            {'User-Agent': self.config.user_agent}, headers)
        self.requests.append((method, url, hdrs))
        self.verbose('> %s %s %s', method, url, verbose_headers(hdrs))
        parsed = parse.urlparse(url)
        base = '%s://%s%s' % (parsed.scheme, parsed.netloc, parsed.path)
        self.notify(NOTIFY_CONNECT, parsed.netloc)
        if base == self.auth_url:
            status, out_headers, out_body = self._auth(method, hdrs)
        elif base != self.account_url and \
                not base.startswith(self.account_url + '/'):
            raise NoResponseError(method=method, url=url)
        elif self.token and hdrs.get('X-Auth-Token') != self.token:
            status, out_headers, out_body = 401, {}, b''
        else:
            path = parse.unquote(base[len(self.account_url) + 1:])
            query = dict(parse.parse_qsl(parsed.query))
            if '/' in path:
                container_name, object_name = path.split('/', 1)
            else:
                container_name = path
                object_name = ''
            if not container_name:
                status, out_headers, out_body = self._account(
                    method, query)
            elif not object_name:
                status, out_headers, out_body = self._container(
                    method, container_name, hdrs, query)
            else:
                status, out_headers, out_body = self._object(
                    method, container_name, object_name, hdrs, body)
        if method == 'HEAD':
            out_body = b''
        out_headers.setdefault('Content-Length', str(len(out_body)))
        out_headers['X-Trans-Id'] = 'tx' + uuid4().hex
        reason = REASONS.get(status, 'Unknown')
        self.verbose('< %s %s', status, reason)
        self.notify(NOTIFY_COMPLETE, '', len(out_body), len(out_body))
        raw_headers = list(out_headers.items())
        return Response(
            status, reason, headers_to_dict(raw_headers), out_body,
            method=method, url=url, raw_headers=raw_headers)

    def _auth(self, method, hdrs):
        if method != 'GET':
            return 405, {}, b''
        user = hdrs.get('X-Auth-User')
        if user is None or self.users.get(user) != hdrs.get('X-Auth-Key'):
            return 401, {}, b''
        if not self.token:
            self.token = 'AUTH_tk' + uuid4().hex
        return 200, {
            'X-Auth-Token': self.token, 'X-Storage-Token': self.token,
            'X-Storage-Url': self.account_url}, b''

    def _account(self, method, query):
        if method not in ('GET', 'HEAD'):
            return 405, {}, b''
        hdrs = dict(self.account_headers)
        hdrs['X-Account-Container-Count'] = str(len(self.containers))
        hdrs['X-Account-Object-Count'] = str(sum(
            len(c['objects']) for c in self.containers.values()))
        hdrs['X-Account-Bytes-Used'] = str(sum(
            _bytes_used(c) for c in self.containers.values()))
        if method == 'HEAD':
            return 204, hdrs, b''
        listing = [
            {'name': name, 'count': len(c['objects']),
             'bytes': _bytes_used(c)}
            for name, c in sorted(self.containers.items())]
        return self._listing(listing, query, hdrs)

    def _listing(self, listing, query, hdrs):
        prefix = query.get('prefix')
        marker = query.get('marker')
        limit = int(query.get('limit') or 10000)
        if prefix:
            listing = [e for e in listing if e['name'].startswith(prefix)]
        if marker:
            listing = [e for e in listing if e['name'] > marker]
        listing = listing[:limit]
        if query.get('format') == 'json':
            hdrs['Content-Type'] = 'application/json; charset=utf-8'
            return 200, hdrs, json.dumps(listing).encode('utf8')
        if not listing:
            return 204, hdrs, b''
        hdrs['Content-Type'] = 'text/plain; charset=utf-8'
        return 200, hdrs, ''.join(
            e['name'] + '\n' for e in listing).encode('utf8')

    def _container(self, method, name, hdrs, query):
        container = self.containers.get(name)
        if method == 'PUT':
            status = 202
            if container is None:
                container = self.containers[name] = {
                    'headers': {}, 'objects': {}}
                status = 201
            _update_headers(
                container['headers'], hdrs, CONTAINER_HEADER_PREFIXES)
            return status, {}, b''
        if container is None:
            return 404, {}, b''
        if method == 'POST':
            _update_headers(
                container['headers'], hdrs, CONTAINER_HEADER_PREFIXES)
            return 204, {}, b''
        if method == 'DELETE':
            if container['objects']:
                return 409, {}, b'There was a conflict when trying to ' \
                    b'complete your request.'
            del self.containers[name]
            return 204, {}, b''
        if method not in ('GET', 'HEAD'):
            return 405, {}, b''
        out = dict(container['headers'])
        out['X-Container-Object-Count'] = str(len(container['objects']))
        out['X-Container-Bytes-Used'] = str(_bytes_used(container))
        if method == 'HEAD':
            return 204, out, b''
        listing = [
            {'name': name, 'bytes': len(o['content']), 'hash': o['etag'],
             'content_type': o['content_type'],
             'last_modified': o['last_modified']}
            for name, o in sorted(container['objects'].items())]
        return self._listing(listing, query, out)

    def _object(self, method, container_name, name, hdrs, body):
        container = self.containers.get(container_name)
        if container is None:
            return 404, {}, b''
        obj = container['objects'].get(name)
        if method == 'PUT':
            etag = hashlib.md5(body).hexdigest()
            if hdrs.get('Etag') and hdrs['Etag'].strip('"') != etag:
                return 422, {}, b''
            now = time()
            container['objects'][name] = {
                'content': body, 'etag': etag,
                'content_type':
                    hdrs.get('Content-Type') or 'application/octet-stream',
                'last_modified': datetime.fromtimestamp(
                    now, timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%f'),
                'last_modified_http': formatdate(now, usegmt=True),
                'headers': dict(
                    (k, v) for k, v in hdrs.items()
                    if k.startswith(OBJECT_META_PREFIX) and v)}
            return 201, {'Etag': etag}, b''
        if obj is None:
            return 404, {}, b''
        if method == 'POST':
            obj['headers'] = dict(
                (k, v) for k, v in hdrs.items()
                if k.startswith(OBJECT_META_PREFIX) and v)
            return 202, {}, b''
        if method == 'DELETE':
            del container['objects'][name]
            return 204, {}, b''
        if method not in ('GET', 'HEAD'):
            return 405, {}, b''
        out = dict(obj['headers'])
        out['Etag'] = obj['etag']
        out['Content-Type'] = obj['content_type']
        out['Content-Length'] = str(len(obj['content']))
        out['Last-Modified'] = obj['last_modified_http']
        return 200, out, obj['content']


def _bytes_used(container):
    return sum(len(o['content']) for o in container['objects'].values())


def _update_headers(stored, hdrs, prefixes):
    for k, v in hdrs.items():
        if k.startswith(prefixes):
            if v:
                stored[k] = v
            else:
                stored.pop(k, None)
