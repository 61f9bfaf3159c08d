"""
URI resolution for JSON Schema references.

Only the subset of RFC 3986 needed to merge a reference against the current
resolution scope is implemented: relative paths are joined against the
directory of the base path, without dot-segment normalization.
"""

from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from .api import UriParseError


class UriResolver:
    """Resolves JSON Schema URIs."""

    FRAGMENT_SEPARATOR = "#"

    def resolve(self, uri: Optional[str], base_uri: Optional[str] = None) -> Optional[str]:
        """
        Resolve a URI against a base URI.

        Args:
            uri: Absolute or relative URI
            base_uri: Base URI, required to resolve relative URIs

        Returns:
            Absolute URI, or the base URI unchanged when `uri` is empty

        Raises:
            UriParseError: If either URI is malformed
        """
        if not uri:
            return base_uri

        parts = self.parse(uri)

        # Already absolute
        if "scheme" in parts:
            return uri

        merged = self.parse(base_uri or "")

        if "host" in parts:
            # Network-path reference, the authority comes from the reference
            for key in ("host", "port", "user", "pass"):
                merged.pop(key, None)
                if key in parts:
                    merged[key] = parts[key]
            merged["path"] = parts.get("path", "")
        elif "path" in parts:
            base_path = merged.get("path")
            if not base_path and "host" in merged:
                base_path = "/"
            merged["path"] = self._join_paths(base_path, parts["path"])

        if "query" in parts:
            merged["query"] = parts["query"]
        if "fragment" in parts:
            merged["fragment"] = parts["fragment"]

        return self.build(merged)

    def is_valid(self, uri: Any) -> bool:
        """
        Check whether a URI can be parsed.

        Args:
            uri: URI to check

        Returns:
            True if the URI parses without errors
        """
        try:
            self.parse(uri)
        except UriParseError:
            return False
        return True

    def extract_location(self, uri: Optional[str]) -> str:
        """
        Strip the fragment from a URI.

        Args:
            uri: URI, possibly with a fragment

        Returns:
            Everything before the first '#'
        """
        if not uri:
            return ""
        return uri.split(self.FRAGMENT_SEPARATOR, 1)[0]

    def extract_fragment(self, uri: Optional[str]) -> Optional[str]:
        """
        Get the fragment of a URI.

        Args:
            uri: URI, possibly with a fragment

        Returns:
            Everything after the first '#', or None if there is no fragment
        """
        if not uri or self.FRAGMENT_SEPARATOR not in uri:
            return None
        return uri.split(self.FRAGMENT_SEPARATOR, 1)[1]

    def parse(self, uri: Any) -> Dict[str, Any]:
        """
        Parse a URI into its components.

        Only the components present in the URI are set, so an empty query
        ("?") is distinguishable from a missing one.

        Args:
            uri: URI string

        Returns:
            Dictionary with any of the keys scheme, host, port, user, pass,
            path, query and fragment

        Raises:
            UriParseError: If the URI is malformed
        """
        if not isinstance(uri, str):
            raise UriParseError(f"URI {uri!r} was malformed and could not be parsed", uri=str(uri))

        try:
            split = urlsplit(uri)
            port = split.port
        except ValueError as e:
            raise UriParseError(f"URI {uri} was malformed and could not be parsed: {e}", uri=uri) from e

        parts: Dict[str, Any] = {}
        if split.scheme:
            parts["scheme"] = split.scheme

        if split.netloc:
            userinfo, _, hostport = split.netloc.rpartition("@")
            if userinfo:
                user, has_pass, password = userinfo.partition(":")
                parts["user"] = user
                if has_pass:
                    parts["pass"] = password
            if port is not None:
                parts["port"] = port
                hostport = hostport[:hostport.rfind(":")]
            parts["host"] = hostport

        if split.path:
            parts["path"] = split.path

        location = self.extract_location(uri)
        if "?" in location:
            parts["query"] = split.query
        if self.FRAGMENT_SEPARATOR in uri:
            parts["fragment"] = split.fragment

        return parts

    def build(self, parts: Dict[str, Any]) -> str:
        """
        Build a URI from its components.

        Args:
            parts: Components as returned by `parse`

        Returns:
            URI string
        """
        scheme = parts.get("scheme")
        host = parts.get("host")

        uri = f"{scheme}:" if scheme else ""
        if host is not None or scheme == "file":
            uri += "//"
            if "user" in parts or "pass" in parts:
                uri += parts.get("user", "")
                if "pass" in parts:
                    uri += f":{parts['pass']}"
                uri += "@"
            uri += host or ""
            if "port" in parts:
                uri += f":{parts['port']}"

        uri += parts.get("path", "")
        if "query" in parts:
            uri += f"?{parts['query']}"
        if "fragment" in parts:
            uri += f"{self.FRAGMENT_SEPARATOR}{parts['fragment']}"

        return uri

    @staticmethod
    def _join_paths(base_path: Optional[str], path: str) -> str:
        """Replace the last segment of the base path with a relative path."""
        if path.startswith("/") or not base_path:
            return path

        directory = base_path[:base_path.rfind("/") + 1]
        return directory + path
