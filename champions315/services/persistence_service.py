"""
Persistence service for the Champions 315 live lineup manager.

This module handles reading and writing the JSON documents the
application keeps on disk (roster, match history).
"""
import json
import os
from typing import Any


class PersistenceService:
    """Service for persisting JSON documents to files."""

    @staticmethod
    def save_json(data: Any, file_path: str) -> None:
        """
        Save a JSON-serializable document to a file.
        
        The document is written to a temporary file first and then moved
        into place, so a crash never leaves a half-written file behind.
        
        Args:
            data: The document to save
            file_path: Path where to save the file
            
        Raises:
            IOError: If file cannot be written
            OSError: If path is invalid
        """
        # Ensure directory exists
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
            
        tmp_path = f"{file_path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, file_path)

    @staticmethod
    def load_json(file_path: str) -> Any:
        """
        Load a JSON document from a file.
        
        Args:
            file_path: Path to the JSON file to load
            
        Returns:
            The decoded document
            
        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file contains invalid JSON
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")
            
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
