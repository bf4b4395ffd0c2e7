"""CSV loading: row splitting, header handling and cell coercion."""
