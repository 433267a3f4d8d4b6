"""
Provides the StorageClient for working with a Swift account.
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
from collections import OrderedDict

from swiftstore.exceptions import AuthorizationError, NotFound, \
    UnexpectedStatus
from swiftstore.storage import statusmap
from swiftstore.storage.account import AccountInfo, Credentials
from swiftstore.storage.container import Container, \
    CONTAINER_METADATA_HEADER_PREFIX, generate_metadata_headers
from swiftstore.storage.storageobject import StorageObject, \
    OBJECT_METADATA_HEADER_PREFIX
from swiftstore.transport.httptransport import HTTPTransport
from swiftstore.utils import quote, query_string


class StorageClient(object):
    """
    Works with the containers and objects of one Swift account.

    The client holds only the token and storage URL it was given and
    the transport to send requests with; every operation is a single
    blocking request and returns a fresh snapshot or a boolean
    outcome. Nothing is retried; see
    :py:func:`swiftstore.exceptions.is_retryable` for deciding when
    that would be worthwhile.

    Besides this constructor, a client can be made with
    :py:func:`new_from_swift_auth`, :py:func:`new_from_identity`, or
    :py:func:`new_from_service_catalog`.

    :param token: The auth token to send with every request.
    :param url: The storage URL of the account (example:
        ``https://store.example/v1/AUTH_x``).
    :param transport: The
        :py:class:`swiftstore.transport.transport.Transport` to use.
        Default: a new
        :py:class:`swiftstore.transport.httptransport.HTTPTransport`.
    """

    #: The service catalog type of object storage endpoints.
    SERVICE_TYPE = 'object-store'

    #: The version of the Swift API spoken.
    API_VERSION = '1'

    #: The region used when none is given to the catalog factories.
    DEFAULT_REGION = 'region-a.geo-1'

    def __init__(self, token, url, transport=None):
        self._credentials = Credentials(token, url.rstrip('/'))
        self._transport = transport or HTTPTransport()

    @classmethod
    def new_from_swift_auth(cls, account, key, url, transport=None):
        """
        Returns a client after exchanging an account and key for a
        token and storage URL with a v1 (legacy) auth endpoint.

        :param account: The account, sent as X-Auth-User.
        :param key: The key, sent as X-Auth-Key.
        :param url: The auth URL (example:
            ``https://auth.example/auth/v1.0``).
        :param transport: The transport to use for the exchange and
            the returned client.
        :raises AuthorizationError: If the exchange was refused or did
            not produce a token and storage URL.
        :raises NotFound: If there is no auth endpoint at the URL.
        """
        transport = transport or HTTPTransport()
        response = transport.send(url, 'GET', {
            'X-Auth-User': account, 'X-Auth-Key': key})
        statusmap.SWIFT_AUTH.resolve(response)
        token = response.header('x-auth-token') or \
            response.header('x-storage-token')
        storage_url = response.header('x-storage-url')
        if not token or not storage_url:
            raise AuthorizationError(
                response.status, response.reason, method='GET', url=url,
                operation=statusmap.SWIFT_AUTH.operation,
                message='Auth response had no %s header.' % (
                    'X-Storage-Url' if token else 'X-Auth-Token'))
        return cls(token, storage_url, transport)

    @classmethod
    def new_from_identity(cls, identity, region=DEFAULT_REGION,
                          transport=None):
        """
        Returns a client for an already authenticated identity
        service session, or None if its catalog has no object storage
        endpoint for the region.

        :param identity: Any object with ``token()`` and
            ``service_catalog()`` methods.
        """
        return cls.new_from_service_catalog(
            identity.service_catalog(), identity.token(), region,
            transport)

    @classmethod
    def new_from_service_catalog(cls, catalog, token, region=DEFAULT_REGION,
                                 transport=None):
        """
        Returns a client for the first public object storage endpoint
        in the region, or None if the catalog has none. Callers must
        check for None.

        :param catalog: A list of service entries as returned by an
            identity service, each a dict with ``type`` and
            ``endpoints``; each endpoint a dict with ``region`` and
            ``publicURL``.
        :param token: The auth token issued with the catalog.
        """
        for service in catalog or []:
            if service.get('type') != cls.SERVICE_TYPE:
                continue
            for endpoint in service.get('endpoints') or []:
                if endpoint.get('publicURL') and \
                        endpoint.get('region') == region:
                    return cls(token, endpoint['publicURL'], transport)
        return None

    @property
    def token(self):
        return self._credentials.token

    @property
    def url(self):
        return self._credentials.url

    @property
    def credentials(self):
        return self._credentials

    @property
    def transport(self):
        return self._transport

    def _auth_headers(self, headers=None):
        hdrs = {'X-Auth-Token': self.token}
        if headers:
            hdrs.update(headers)
        return hdrs

    def _container_url(self, container):
        return '%s/%s' % (self.url, quote(container, safe=''))

    def _object_url(self, container, name):
        # Leading/trailing slashes are allowed in object names, so don't
        # strip them.
        return '%s/%s' % (
            self._container_url(container), quote(name, safe='/'))

    def _listing_url(self, base, limit, marker, prefix=None):
        query = {'format': 'json'}
        if limit and int(limit) > 0:
            query['limit'] = int(limit)
        if marker:
            query['marker'] = marker
        if prefix:
            query['prefix'] = prefix
        return base + '?' + query_string(query)

    def _request(self, table, url, method, headers=None, body=b''):
        response = self._transport.send(
            url, method, self._auth_headers(headers), body)
        return table.resolve(response), response

    def list_containers(self, limit=0, marker=None):
        """
        Returns an OrderedDict of container name to
        :py:class:`swiftstore.storage.container.Container`, in the
        order the server listed them.

        :param limit: The most containers to return; 0 leaves the
            limit to the server (usually 10,000).
        :param marker: Only containers after this name are listed.
            To get the next page, pass the last name received.
        """
        outcome, response = self._request(
            statusmap.LIST_CONTAINERS,
            self._listing_url(self.url, limit, marker), 'GET')
        containers = OrderedDict()
        if outcome == statusmap.LISTED:
            for entry in _listing(statusmap.LIST_CONTAINERS, response):
                container = Container.from_json(entry)
                containers[container.name] = container
        return containers

    def get_container(self, name):
        """
        Returns the :py:class:`swiftstore.storage.container.Container`
        for the name.

        :raises NotFound: If there is no such container.
        """
        response = self._request(
            statusmap.FETCH_CONTAINER, self._container_url(name), 'HEAD')[1]
        return Container.from_response(name, response)

    def container_exists(self, name):
        """
        Returns True if the container exists.
        """
        try:
            self.get_container(name)
        except NotFound:
            return False
        return True

    def _put_container(self, name, acl=None, metadata=None):
        headers = {}
        if metadata:
            headers.update(generate_metadata_headers(
                metadata, CONTAINER_METADATA_HEADER_PREFIX))
        if acl is not None:
            headers.update(acl.headers())
        return self._request(
            statusmap.CREATE_CONTAINER, self._container_url(name), 'PUT',
            headers)[0]

    def create_container(self, name, acl=None, metadata=None):
        """
        Creates the container, applying the ACL and metadata given.

        :param name: The name of the container.
        :param acl: A :py:class:`swiftstore.storage.acl.ACL` to apply.
        :param metadata: A dict of user metadata to apply.
        :returns: True if the container was created, False if it
            already existed (the ACL and metadata are still applied).
        """
        return self._put_container(name, acl, metadata) == \
            statusmap.CREATED

    def update_container(self, name, acl=None, metadata=None):
        """
        Applies the ACL and metadata to the container. Swift updates
        with the same request that creates, so this creates the
        container if it does not exist; the return value is as for
        :py:func:`create_container`.
        """
        return self.create_container(name, acl, metadata)

    def change_container_acl(self, name, acl):
        """
        Applies the ACL to the container, creating the container if it
        does not exist; the return value is as for
        :py:func:`create_container`.
        """
        return self.create_container(name, acl)

    def delete_container(self, name):
        """
        Deletes the container.

        :returns: True if the container was deleted, False if there
            was no such container.
        :raises ContainerNotEmpty: If the container still holds
            objects.
        """
        outcome = self._request(
            statusmap.DELETE_CONTAINER, self._container_url(name),
            'DELETE')[0]
        return outcome == statusmap.DELETED

    def account_info(self):
        """
        Returns the :py:class:`swiftstore.storage.account.AccountInfo`
        for the account. Counts missing from the response are 0.

        The object count falls back to the container count when the
        server sends no X-Account-Object-Count header, as earlier
        releases always reported.
        """
        response = self._request(statusmap.ACCOUNT_INFO, self.url, 'HEAD')[1]
        containers = _int(response.header('x-account-container-count', 0))
        objects = response.header('x-account-object-count')
        return AccountInfo(
            _int(response.header('x-account-bytes-used', 0)), containers,
            containers if objects is None else _int(objects))

    def list_objects(self, container, limit=0, marker=None, prefix=None):
        """
        Returns an OrderedDict of object name to
        :py:class:`swiftstore.storage.storageobject.StorageObject`, in
        the order the server listed them. Contents are not fetched.

        :param container: The name of the container.
        :param limit: The most objects to return; 0 leaves the limit
            to the server.
        :param marker: Only objects after this name are listed.
        :param prefix: Only objects whose names start with this are
            listed.
        :raises NotFound: If there is no such container.
        """
        outcome, response = self._request(
            statusmap.LIST_OBJECTS,
            self._listing_url(
                self._container_url(container), limit, marker, prefix),
            'GET')
        objects = OrderedDict()
        if outcome == statusmap.LISTED:
            for entry in _listing(statusmap.LIST_OBJECTS, response):
                if 'name' not in entry:
                    continue
                obj = StorageObject.from_json(container, entry)
                objects[obj.name] = obj
        return objects

    def get_object_info(self, container, name):
        """
        Returns the
        :py:class:`swiftstore.storage.storageobject.StorageObject` for
        the object without fetching its contents.

        :raises NotFound: If there is no such object or container.
        """
        response = self._request(
            statusmap.FETCH_OBJECT, self._object_url(container, name),
            'HEAD')[1]
        return StorageObject.from_response(container, name, response)

    def get_object(self, container, name):
        """
        Returns the
        :py:class:`swiftstore.storage.storageobject.StorageObject` for
        the object with its contents read into memory.

        :raises NotFound: If there is no such object or container.
        """
        response = self._request(
            statusmap.FETCH_OBJECT, self._object_url(container, name),
            'GET')[1]
        return StorageObject.from_response(
            container, name, response, response.body)

    def object_exists(self, container, name):
        """
        Returns True if the object exists.
        """
        try:
            self.get_object_info(container, name)
        except NotFound:
            return False
        return True

    def put_object(self, container, name, content, content_type=None,
                   metadata=None, etag=None):
        """
        Creates or replaces the object.

        :param container: The name of an existing container.
        :param name: The name of the object.
        :param content: The bytes or str contents, or a file-like
            object to read them from. File-like contents are streamed
            if the transport can; otherwise they are read into memory
            first.
        :param content_type: The Content-Type to store. Default: left
            to the server.
        :param metadata: A dict of user metadata to store.
        :param etag: The MD5 hex digest of the contents; if given the
            server refuses contents that do not match.
        :returns: The
            :py:class:`swiftstore.storage.storageobject.StorageObject`
            as stored, with the ETag the server computed.
        :raises NotFound: If there is no such container.
        :raises UnprocessableEntity: If the etag did not match.
        """
        headers = self._auth_headers(generate_metadata_headers(
            metadata, OBJECT_METADATA_HEADER_PREFIX))
        if content_type:
            headers['Content-Type'] = content_type
        if etag:
            headers['ETag'] = etag
        url = self._object_url(container, name)
        size = None
        if hasattr(content, 'read'):
            start = _tell(content)
            response = self._transport.send_with_stream(
                url, 'PUT', headers, content)
            if start is not None:
                end = _tell(content)
                if end is not None:
                    size = end - start
        else:
            if isinstance(content, str):
                content = content.encode('utf8')
            size = len(content or b'')
            response = self._transport.send(url, 'PUT', headers, content)
        statusmap.CREATE_OBJECT.resolve(response)
        stored_etag = response.header('etag') or etag
        if stored_etag:
            stored_etag = stored_etag.strip('"')
        return StorageObject(
            name, container, size, content_type, stored_etag,
            response.header('last-modified'), metadata)

    def update_object_metadata(self, container, name, metadata):
        """
        Replaces the user metadata of the object; keys not given are
        removed.

        :returns: True once the server accepts the change.
        :raises NotFound: If there is no such object or container.
        """
        outcome = self._request(
            statusmap.UPDATE_OBJECT, self._object_url(container, name),
            'POST', generate_metadata_headers(
                metadata, OBJECT_METADATA_HEADER_PREFIX))[0]
        return outcome == statusmap.ACCEPTED

    def delete_object(self, container, name):
        """
        Deletes the object.

        :returns: True if the object was deleted, False if there was
            no such object.
        """
        outcome = self._request(
            statusmap.DELETE_OBJECT, self._object_url(container, name),
            'DELETE')[0]
        return outcome == statusmap.DELETED


def _listing(table, response):
    try:
        entries = response.json() or []
        if not isinstance(entries, list):
            raise ValueError('not a list')
    except ValueError as err:
        raise UnexpectedStatus(
            response.status, response.reason, method=response.method,
            url=response.url, operation=table.operation,
            message='%s: %s %s returned an unparseable listing: %s' % (
                table.operation, response.method, response.url, err))
    return entries


def _int(value):
    if isinstance(value, list):
        value = value[0]
    try:
        return int(value or 0)
    except ValueError:
        return 0


def _tell(fp):
    tell = getattr(fp, 'tell', None)
    if not tell:
        return None
    try:
        return tell()
    except (OSError, ValueError):
        return None
