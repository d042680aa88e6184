#!/usr/bin/env python3
"""
Configuration Manager for the ECR registry auth supplier

This module handles loading and managing configuration from config.yaml
and environment variables, and builds the boto3 ECR client and supplier
from it.
"""

import logging
import os
from typing import Any, Dict, Optional

import boto3
import yaml
from botocore.config import Config

from ecr_auth.auth.ecr import EcrRegistryAuthSupplier
from ecr_auth.logging_utils import parse_log_level


class ConfigValidationError(Exception):
    """Raised when configuration validation fails"""


class ConfigManager:
    """Manages configuration for the ECR registry auth supplier"""

    def __init__(self, config_file: str = None, validate: bool = True):
        """Initialize ConfigManager

        Args:
            config_file: Path to configuration YAML file (defaults to config.yaml or CONFIG_FILE env var)
            validate: If True, validate configuration on initialization
        """
        if config_file is None:
            config_file = os.environ.get("CONFIG_FILE", "config.yaml")
        self.config_file = config_file
        self.config = self._load_config()

        if validate:
            self.validate_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file with defaults"""
        default_config = {
            "ecr": {
                "region": None,
                "endpoint_url": None,
                "sdk_max_attempts": 1,  # Attempts made inside botocore for each supplier attempt
            },
            "retry": {"max_retries": 1, "backoff_ms": 50},
            "logging": {"level": "INFO"},
        }

        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, "r") as f:
                    user_config = yaml.safe_load(f) or {}
                return self._merge_config(default_config, user_config)
            else:
                logging.warning(f"Config file {self.config_file} not found, using defaults")
                return default_config
        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Error loading config file: {e}")
            return default_config

    def _merge_config(self, default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge user config with defaults"""
        result = default.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    # ECR configuration
    def get_region(self) -> Optional[str]:
        """Get AWS region from environment or config (None lets boto3 decide)"""
        return (
            os.environ.get("AWS_REGION")
            or os.environ.get("AWS_DEFAULT_REGION")
            or self.config.get("ecr", {}).get("region")
        )

    def get_endpoint_url(self) -> Optional[str]:
        """Get a custom ECR API endpoint URL, if any"""
        return os.environ.get("ECR_ENDPOINT_URL") or self.config.get("ecr", {}).get("endpoint_url")

    def get_sdk_max_attempts(self) -> int:
        """Get attempts botocore makes per request, with type coercion"""
        attempts = self.config.get("ecr", {}).get("sdk_max_attempts", 1)
        try:
            return int(attempts)
        except (ValueError, TypeError):
            raise ConfigValidationError(
                f"ecr.sdk_max_attempts must be an integer, got: {attempts} (type: {type(attempts).__name__})"
            )

    # Retry configuration
    def get_max_retries(self) -> int:
        """Get max retries from environment or config, with type coercion"""
        retries = os.environ.get("ECR_AUTH_MAX_RETRIES") or self.config.get("retry", {}).get("max_retries", 1)
        try:
            return int(retries)
        except (ValueError, TypeError):
            raise ConfigValidationError(
                f"retry.max_retries must be an integer, got: {retries} (type: {type(retries).__name__})"
            )

    def get_retry_backoff_ms(self) -> int:
        """Get retry backoff in milliseconds from environment or config, with type coercion"""
        backoff = os.environ.get("ECR_AUTH_RETRY_BACKOFF_MS") or self.config.get("retry", {}).get("backoff_ms", 50)
        try:
            return int(backoff)
        except (ValueError, TypeError):
            raise ConfigValidationError(
                f"retry.backoff_ms must be an integer, got: {backoff} (type: {type(backoff).__name__})"
            )

    # Logging configuration
    def get_log_level(self) -> int:
        """Get log level from environment or config as a logging constant"""
        level = os.environ.get("ECR_AUTH_LOG_LEVEL") or self.config.get("logging", {}).get("level", "INFO")
        try:
            return parse_log_level(level)
        except ValueError:
            raise ConfigValidationError(f"logging.level must be a standard log level name, got: {level}")

    def validate_config(self) -> None:
        """Validate configuration values

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        errors = []
        warnings = []

        try:
            max_retries = self.get_max_retries()
            if max_retries < 0:
                errors.append(f"retry.max_retries must be a non-negative integer, got: {max_retries}")
            elif max_retries > 10:
                warnings.append(f"max_retries is very high ({max_retries}), auth requests may take a long time")
        except ConfigValidationError as e:
            errors.append(str(e))

        try:
            backoff_ms = self.get_retry_backoff_ms()
            if backoff_ms < 0:
                errors.append(f"retry.backoff_ms must be a non-negative integer, got: {backoff_ms}")
            elif backoff_ms > 60000:
                warnings.append(f"backoff_ms is very high ({backoff_ms}ms), auth requests may take a long time")
        except ConfigValidationError as e:
            errors.append(str(e))

        try:
            sdk_max_attempts = self.get_sdk_max_attempts()
            if sdk_max_attempts < 1:
                errors.append(f"ecr.sdk_max_attempts must be a positive integer, got: {sdk_max_attempts}")
        except ConfigValidationError as e:
            errors.append(str(e))

        try:
            self.get_log_level()
        except ConfigValidationError as e:
            errors.append(str(e))

        for warning in warnings:
            logging.warning(f"Configuration warning: {warning}")

        if errors:
            error_msg = "Configuration validation failed:\n  " + "\n  ".join(errors)
            logging.error(error_msg)
            raise ConfigValidationError(error_msg)

    def create_ecr_client(self, region: Optional[str] = None) -> Any:
        """Create a boto3 ECR client.

        botocore's own retries are limited to ecr.sdk_max_attempts so the
        supplier's retry policy decides how often ECR is called.

        Args:
            region: Region overriding the configured one
        """
        config = Config(retries={"total_max_attempts": self.get_sdk_max_attempts(), "mode": "standard"})
        kwargs: Dict[str, Any] = {"config": config}
        region = region or self.get_region()
        if region:
            kwargs["region_name"] = region
        endpoint_url = self.get_endpoint_url()
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        return boto3.client("ecr", **kwargs)

    def create_supplier(
        self,
        client: Any = None,
        max_retries: Optional[int] = None,
        retry_backoff_ms: Optional[int] = None,
    ) -> EcrRegistryAuthSupplier:
        """Build an EcrRegistryAuthSupplier from this configuration

        Args:
            client: ECR client to use (a new one is created if not given)
            max_retries: Overrides the configured max retries
            retry_backoff_ms: Overrides the configured retry backoff

        Raises:
            ValueError: If a retry setting is negative
        """
        if max_retries is None:
            max_retries = self.get_max_retries()
        if retry_backoff_ms is None:
            retry_backoff_ms = self.get_retry_backoff_ms()
        return (
            EcrRegistryAuthSupplier.builder()
            .with_client(client if client is not None else self.create_ecr_client())
            .with_max_retries(max_retries)
            .with_retry_backoff_millis(retry_backoff_ms)
            .build()
        )

    def print_config(self):
        """Print current configuration"""
        print("Current Configuration:")
        print(f"  Config File: {self.config_file}")
        print(f"  AWS Region: {self.get_region() or 'boto3 default'}")
        print(f"  ECR Endpoint URL: {self.get_endpoint_url() or 'boto3 default'}")
        print(f"  SDK Max Attempts: {self.get_sdk_max_attempts()}")
        print(f"  Max Retries: {self.get_max_retries()}")
        print(f"  Retry Backoff: {self.get_retry_backoff_ms()}ms")
        print(f"  Log Level: {logging.getLevelName(self.get_log_level())}")
