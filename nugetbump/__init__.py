"""nugetbump - upgrade outdated NuGet packages across .NET projects."""

__version__ = "0.1.0"
