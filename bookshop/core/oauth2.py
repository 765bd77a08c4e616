from fastapi.security import OAuth2PasswordBearer

# Bearer token from the Authorization header; issued by /auth/login
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
