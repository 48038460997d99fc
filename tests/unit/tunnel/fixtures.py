"""Test fixtures for the tunnel bootstrap pipeline."""

TEST_PORT = "8080"
TEST_PROTOCOL_HTTP = "http"
TEST_PROTOCOL_DEFAULT = "tcp"

# Hostnames and log lines
TEST_HOSTNAME_RAW = "happy-cat-42.trycloudflare.com"
TEST_HOSTNAME_JSON = "calm-fox-7.trycloudflare.com"
TEST_HOSTNAME_LATER = "later-owl-9.trycloudflare.com"

TEST_LOG_RAW = "2024 tunnel: https://happy-cat-42.trycloudflare.com connected\n"
# A truncated box-drawing character ahead of the URL line
TEST_LOG_INVALID_UTF8 = (
    b"INFO banner \xe2\x94 broken\nINFO https://happy-cat-42.trycloudflare.com\n"
)
TEST_LOG_JSON_LINE = '{"message":"visit https://calm-fox-7.trycloudflare.com now"}'
TEST_LOG_JSON_NO_URL = '{"level":"info","message":"Requesting new quick Tunnel on trycloudflare.com..."}'
TEST_LOG_JSON_NON_STRING_MESSAGE = '{"message": 42}'
TEST_LOG_BANNER = (
    '{"level":"info","time":"2024-01-01T00:00:00Z","message":"+----------------------------+"}\n'
    '{"level":"info","time":"2024-01-01T00:00:00Z",'
    '"message":"|  https://calm-fox-7.trycloudflare.com  |"}\n'
)
TEST_LOG_UNRELATED_LINES = [f"2024-01-01 INFO line {i}: nothing to see" for i in range(30)]

TEST_DOWNLOAD_URL = "https://example.invalid/cloudflared-linux-amd64"
TEST_BINARY_CONTENT = b"#!/bin/sh\necho cloudflared\n"

TEST_ERROR_NETWORK = "network unreachable"
TEST_ERROR_PERMISSION_DENIED = "Permission denied"
TEST_RETURN_CODE = 1
