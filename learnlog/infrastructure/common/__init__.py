"""Infrastructure shared by every module: DI, storage errors, tenant guard, schemas."""
