"""
Client library for Swift object storage services.

For convenience, the following names are imported from submodules:

==================  =====================================================
StorageClient       :py:class:`swiftstore.storage.client.StorageClient`
ACL                 :py:class:`swiftstore.storage.acl.ACL`
Container           :py:class:`swiftstore.storage.container.Container`
StorageObject       :py:class:`swiftstore.storage.storageobject.StorageObject`
AccountInfo         :py:class:`swiftstore.storage.account.AccountInfo`
Credentials         :py:class:`swiftstore.storage.account.Credentials`
TransportConfig     :py:class:`swiftstore.transport.transport.TransportConfig`
HTTPTransport       :py:class:`swiftstore.transport.httptransport.HTTPTransport`
BufferedTransport   :py:class:`swiftstore.transport.buffertransport.BufferedTransport`
MemoryTransport     :py:class:`swiftstore.transport.memorytransport.MemoryTransport`
==================  =====================================================

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
#: The version of the package.
VERSION = '1.0'

# flake8: noqa
from swiftstore.transport import TransportConfig, HTTPTransport, \
    BufferedTransport, MemoryTransport
from swiftstore.storage import StorageClient, ACL, Container, \
    StorageObject, AccountInfo, Credentials
