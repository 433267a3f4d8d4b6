"""
Contains the StorageObject snapshot.
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
from swiftstore.storage.container import extract_metadata


#: The prefix of object user metadata headers.
OBJECT_METADATA_HEADER_PREFIX = 'X-Object-Meta-'


class StorageObject(object):
    """
    A read-only snapshot of an object as the server described it.

    :param name: The name of the object.
    :param container: The name of the container holding the object.
    :param size: The size of the object in bytes.
    :param content_type: The Content-Type of the object.
    :param etag: The ETag (MD5 checksum) of the object's contents.
    :param last_modified: The last modified time as the server
        formatted it.
    :param metadata: A dict of the user metadata.
    :param content: The bytes of the object's contents, only when
        they were fetched.
    """

    def __init__(self, name, container=None, size=0, content_type=None,
                 etag=None, last_modified=None, metadata=None,
                 content=None):
        self._name = name
        self._container = container
        self._size = int(size or 0)
        self._content_type = content_type
        self._etag = etag
        self._last_modified = last_modified
        self._metadata = dict(metadata or {})
        self._content = content

    @classmethod
    def from_json(cls, container, data):
        """
        Returns a StorageObject for one entry of a JSON object listing.
        """
        return cls(
            data['name'], container, data.get('bytes'),
            data.get('content_type'), data.get('hash'),
            data.get('last_modified'))

    @classmethod
    def from_response(cls, container, name, response, content=None):
        """
        Returns a StorageObject from the headers of an object HEAD or
        GET :py:class:`swiftstore.transport.transport.Response`.
        """
        etag = response.header('etag')
        if etag:
            etag = etag.strip('"')
        size = response.header('content-length')
        if content is not None:
            size = len(content)
        return cls(
            name, container, size, response.header('content-type'), etag,
            response.header('last-modified'),
            extract_metadata(
                response.raw_headers, OBJECT_METADATA_HEADER_PREFIX),
            content)

    @property
    def name(self):
        return self._name

    @property
    def container(self):
        return self._container

    @property
    def size(self):
        return self._size

    @property
    def content_type(self):
        return self._content_type

    @property
    def etag(self):
        return self._etag

    @property
    def last_modified(self):
        return self._last_modified

    @property
    def metadata(self):
        return dict(self._metadata)

    @property
    def content(self):
        return self._content

    def __repr__(self):
        return 'StorageObject(%r, %r, size=%r)' % (
            self._container, self._name, self._size)
