"""
Contains the Container snapshot and the helpers for user metadata
headers.
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
from swiftstore.storage.acl import ACL


#: The prefix of container user metadata headers.
CONTAINER_METADATA_HEADER_PREFIX = 'X-Container-Meta-'


def generate_metadata_headers(metadata, prefix):
    """
    Returns a dict of headers for the metadata dict, each key turned
    into a prefixed header name. An empty value removes the key on
    the server.
    """
    return dict(
        (prefix + str(k), str(v)) for k, v in (metadata or {}).items())


def extract_metadata(headers, prefix):
    """
    Returns the user metadata dict found in the headers, keyed by the
    header names with the prefix removed. The headers may be a dict or
    a list of (name, value) tuples such as
    :py:attr:`swiftstore.transport.transport.Response.raw_headers`.
    Header names are matched case insensitively; the keys keep the
    case the headers carry. If a header occurs more than once the
    first value is used.
    """
    if hasattr(headers, 'items'):
        headers = headers.items()
    lowered_prefix = prefix.lower()
    metadata = {}
    for k, v in headers or []:
        if k.lower().startswith(lowered_prefix):
            if isinstance(v, list):
                v = v[0]
            metadata.setdefault(k[len(prefix):], v)
    return metadata


def _int_header(headers, name):
    value = headers.get(name)
    if isinstance(value, list):
        value = value[0]
    try:
        return int(value or 0)
    except ValueError:
        return 0


class Container(object):
    """
    A read-only snapshot of a container as the server described it.
    To change a container, use the
    :py:class:`swiftstore.storage.client.StorageClient` and fetch a
    new snapshot.

    :param name: The name of the container.
    :param bytes: The bytes used by the objects in the container.
    :param count: The number of objects in the container.
    :param acl: The :py:class:`swiftstore.storage.acl.ACL`, or None
        if it was not known (container listings do not include it).
    :param metadata: A dict of the user metadata.
    """

    def __init__(self, name, bytes=0, count=0, acl=None, metadata=None):
        self._name = name
        self._bytes = int(bytes or 0)
        self._count = int(count or 0)
        self._acl = ACL(acl.rules) if acl is not None else None
        self._metadata = dict(metadata or {})

    @classmethod
    def from_json(cls, data):
        """
        Returns a Container for one entry of a JSON container listing.
        """
        return cls(data['name'], data.get('bytes'), data.get('count'))

    @classmethod
    def from_response(cls, name, response):
        """
        Returns a Container from the headers of a container HEAD or
        GET :py:class:`swiftstore.transport.transport.Response`.
        """
        headers = response.headers
        return cls(
            name, _int_header(headers, 'x-container-bytes-used'),
            _int_header(headers, 'x-container-object-count'),
            ACL.from_headers(headers),
            extract_metadata(
                response.raw_headers, CONTAINER_METADATA_HEADER_PREFIX))

    @property
    def name(self):
        return self._name

    @property
    def bytes(self):
        return self._bytes

    @property
    def count(self):
        return self._count

    @property
    def acl(self):
        if self._acl is None:
            return None
        return ACL(self._acl.rules)

    @property
    def metadata(self):
        return dict(self._metadata)

    def __repr__(self):
        return 'Container(%r, bytes=%r, count=%r)' % (
            self._name, self._bytes, self._count)
