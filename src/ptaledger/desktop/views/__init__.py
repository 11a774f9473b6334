"""Desktop view builders."""
