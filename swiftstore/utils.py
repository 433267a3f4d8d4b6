"""
Contains general tools useful when accessing Swift services.
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
import re
from urllib import parse


#: Matches an HTTP status line embedded in diagnostic text.
STATUS_LINE_RE = re.compile(r'HTTP/1\.[01]? ([0-9]+) ([ a-zA-Z]+)')

#: Request headers whose values are never written to verbose output.
SCRUBBED_HEADERS = ('X-Auth-Token', 'X-Auth-Key', 'X-Storage-Token')


def quote(value, safe='/:'):
    """
    Much like parse.quote in that it returns a URL encoded string
    for the given value, protecting the safe characters; but this
    version also ensures the value is UTF-8 encoded.
    """
    if isinstance(value, bytes):
        value = value.decode('utf8')
    elif not isinstance(value, str):
        value = str(value)
    return parse.quote(value.encode('utf8'), safe)


def query_string(query):
    """
    Returns the URL encoded query string for the given dict, sorted
    by key. Keys with empty values are sent bare.
    """
    return '&'.join(
        ('%s=%s' % (quote(k), quote(v, safe='')) if v != '' else quote(k))
        for k, v in sorted(query.items()))


def headers_to_dict(headers):
    """
    Converts a sequence of (name, value) tuples into a dict where if
    a given name occurs more than once its value in the dict will be
    a list of values.
    """
    hdrs = {}
    for h, v in headers:
        h = h.lower()
        if h in hdrs:
            if isinstance(hdrs[h], list):
                hdrs[h].append(v)
            else:
                hdrs[h] = [hdrs[h], v]
        else:
            hdrs[h] = v
    return hdrs


def titled_headers(*header_dicts):
    """
    Merges the given header dicts, later ones winning, into a single
    dict with Title-Cased names.
    """
    titled = {}
    for headers in header_dicts:
        if headers:
            titled.update((k.title(), v) for k, v in headers.items())
    return titled


def verbose_headers(headers):
    """
    Returns a single line rendition of the headers for verbose
    output with any credentials scrubbed.
    """
    return '  '.join(
        '%s: %s' % (k, '<scrubbed>' if k.title() in SCRUBBED_HEADERS else v)
        for k, v in sorted(headers.items()))


def parse_status_line(text):
    """
    Returns (status, reason) for the first HTTP status line found in
    the text or None if there is none.
    """
    match = STATUS_LINE_RE.search(text or '')
    if not match:
        return None
    return int(match.group(1)), match.group(2).strip()


def parse_bool(value):
    """
    Returns True or False for the usual textual spellings of a
    boolean or raises ValueError.
    """
    lowered = str(value).strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError('Not a boolean value: %r' % value)
