"""
Settings for the tests that run against a real Swift cluster. They
are skipped unless SWIFTSTORE_AUTH_URL, SWIFTSTORE_AUTH_USER, and
SWIFTSTORE_AUTH_KEY are set in the environment; the auth URL must be
a v1 (legacy) auth endpoint.
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
import os
import unittest

from swiftstore.storage.client import StorageClient
from swiftstore.transport.httptransport import HTTPTransport
from swiftstore.transport.transport import TransportConfig


AUTH_URL = os.environ.get('SWIFTSTORE_AUTH_URL')
AUTH_USER = os.environ.get('SWIFTSTORE_AUTH_USER')
AUTH_KEY = os.environ.get('SWIFTSTORE_AUTH_KEY')


def new_client():
    """
    Returns a StorageClient authenticated against the configured
    cluster, or raises unittest.SkipTest if none is configured.
    """
    if not (AUTH_URL and AUTH_USER and AUTH_KEY):
        raise unittest.SkipTest(
            'SWIFTSTORE_AUTH_URL, SWIFTSTORE_AUTH_USER, and '
            'SWIFTSTORE_AUTH_KEY are not all set')
    return StorageClient.new_from_swift_auth(
        AUTH_USER, AUTH_KEY, AUTH_URL,
        HTTPTransport(TransportConfig.from_environ()))
