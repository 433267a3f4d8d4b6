"""
Contains the transports for sending requests to Swift services.

For convenience, the following names are imported from submodules:

=================  ========================================================
Transport          :py:class:`swiftstore.transport.transport.Transport`
TransportConfig    :py:class:`swiftstore.transport.transport.TransportConfig`
Response           :py:class:`swiftstore.transport.transport.Response`
HTTPTransport      :py:class:`swiftstore.transport.httptransport.HTTPTransport`
BufferedTransport  :py:class:`swiftstore.transport.buffertransport.BufferedTransport`
MemoryTransport    :py:class:`swiftstore.transport.memorytransport.MemoryTransport`
=================  ========================================================

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
# flake8: noqa
from swiftstore.transport.transport import Transport, TransportConfig, \
    Response
from swiftstore.transport.httptransport import HTTPTransport
from swiftstore.transport.buffertransport import BufferedTransport
from swiftstore.transport.memorytransport import MemoryTransport
