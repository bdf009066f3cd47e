"""HTTP clients for the catalog and video platform, and the fetch cycle."""
